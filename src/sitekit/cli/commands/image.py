"""Image operations (info, resize, thumbnail, crop, rotate, watermark)."""

from typing import Optional

import click

SIZE_HELP = "Size: 500 (square), 0.5 (ratio), 800x600, 800x0, 0x600, 800x600! (keep aspect)"

POSITION_CHOICES = ["top-left", "top-right", "bottom-left", "bottom-right"]


def _parse_size(value: str):
    from sitekit.models.geometry import parse_size_text

    try:
        return parse_size_text(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _save_options(quality: Optional[int]) -> Optional[dict]:
    return {"quality": quality} if quality is not None else None


def _report(result, action: str) -> None:
    from sitekit.cli.progress import print_success
    from sitekit.cli.service_helpers import handle_result

    path = handle_result(result)
    print_success(f"{action}: {path}")


@click.group()
def image() -> None:
    """Image operations (info, resize, thumbnail, crop, rotate, watermark)."""
    pass


@image.command("info")
@click.argument("path")
def image_info(path: str) -> None:
    """Display image information."""
    from sitekit.cli.service_helpers import handle_result, services

    info = handle_result(services.image.info(path))

    click.echo(f"File: {path}")
    click.echo(f"Size: {info['width']}x{info['height']}")
    click.echo(f"Mode: {info['mode']}")
    click.echo(f"Format: {info['format'] or 'unknown'}")


@image.command("resize")
@click.argument("input_path")
@click.argument("size")
@click.option("--output", "-o", default="", help="Output file (default: overwrite input)")
@click.option(
    "--filter",
    "-f",
    "resample",
    default="",
    help="Resampling filter (point, box, bilinear, hamming, bicubic, lanczos)",
)
@click.option("--quality", "-q", default=None, type=click.IntRange(1, 100), help="JPEG/WebP quality")
def image_resize(
    input_path: str,
    size: str,
    output: str,
    resample: str,
    quality: Optional[int],
) -> None:
    """Resize an image.

    SIZE: 500 (square), 0.5 (ratio), 800x600, 800x0, 0x600, 800x600! (keep aspect)
    """
    from sitekit.cli.service_helpers import services

    result = services.image.resize(
        input_path,
        _parse_size(size),
        to=output,
        filter=resample,
        options=_save_options(quality),
    )
    _report(result, "Resized")


@image.command("thumbnail")
@click.argument("input_path")
@click.argument("size")
@click.option("--output", "-o", default="", help="Output file (default: overwrite input)")
@click.option(
    "--mode",
    "-m",
    default="inset",
    type=click.Choice(["inset", "outbound"]),
    help="inset fits inside SIZE, outbound fills SIZE and crops",
)
@click.option("--quality", "-q", default=None, type=click.IntRange(1, 100), help="JPEG/WebP quality")
def image_thumbnail(
    input_path: str,
    size: str,
    output: str,
    mode: str,
    quality: Optional[int],
) -> None:
    """Create a thumbnail that keeps the aspect ratio."""
    from sitekit.cli.service_helpers import services

    result = services.image.thumbnail(
        input_path,
        _parse_size(size),
        to=output,
        mode=mode,
        options=_save_options(quality),
    )
    _report(result, "Thumbnail")


@image.command("crop")
@click.argument("input_path")
@click.argument("x", type=click.IntRange(min=0))
@click.argument("y", type=click.IntRange(min=0))
@click.argument("size")
@click.option("--output", "-o", default="", help="Output file (default: overwrite input)")
def image_crop(input_path: str, x: int, y: int, size: str, output: str) -> None:
    """Crop SIZE out of an image starting at X, Y."""
    from sitekit.cli.service_helpers import services

    result = services.image.crop(input_path, (x, y), _parse_size(size), to=output)
    _report(result, "Cropped")


@image.command("rotate")
@click.argument("input_path")
@click.argument("angle", type=float)
@click.option("--output", "-o", default="", help="Output file (default: overwrite input)")
@click.option("--background", "-b", default=None, help="Fill color, e.g. #ffffff")
def image_rotate(input_path: str, angle: float, output: str, background: Optional[str]) -> None:
    """Rotate an image clockwise by ANGLE degrees."""
    from sitekit.cli.service_helpers import services

    result = services.image.rotate(input_path, angle, to=output, background=background)
    _report(result, "Rotated")


@image.command("watermark")
@click.argument("input_path")
@click.option("--output", "-o", default="", help="Output file (default: overwrite input)")
@click.option("--mark", "-w", default="", help="Watermark image (default: configured watermark)")
@click.option(
    "--position",
    "-p",
    default="bottom-right",
    type=click.Choice(POSITION_CHOICES),
    help="Watermark corner",
)
def image_watermark(input_path: str, output: str, mark: str, position: str) -> None:
    """Add a watermark to an image."""
    from sitekit.cli.service_helpers import services

    result = services.image.watermark(input_path, to=output, watermark=mark, position=position)
    _report(result, "Watermarked")
