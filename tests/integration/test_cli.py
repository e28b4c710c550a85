"""
Integration tests for sitekit CLI.
"""

import json

import pytest
from click.testing import CliRunner
from PIL import Image

from sitekit import __version__
from sitekit.cli import cli


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def _size(path) -> tuple:
    with Image.open(path) as image:
        return image.size


class TestCLIBasic:
    """Basic CLI tests."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for group in ("config", "form", "image", "markup"):
            assert group in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--config-file", str(tmp_path / "none.toml"), "config", "show"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestImageCommands:
    """Tests for the image command group."""

    def test_info(self, runner, tmp_image_file):
        result = runner.invoke(cli, ["image", "info", tmp_image_file])

        assert result.exit_code == 0
        assert "Size: 200x100" in result.output
        assert "Format: PNG" in result.output

    def test_info_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["image", "info", str(tmp_path / "missing.png")])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_resize_keep_aspect(self, runner, tmp_image_file, tmp_path):
        target = tmp_path / "out" / "small.png"

        result = runner.invoke(
            cli, ["image", "resize", tmp_image_file, "100x100!", "-o", str(target)]
        )

        assert result.exit_code == 0
        assert _size(target) == (100, 50)

    def test_resize_in_place(self, runner, tmp_image_file):
        result = runner.invoke(cli, ["image", "resize", tmp_image_file, "0.5"])

        assert result.exit_code == 0
        assert _size(tmp_image_file) == (100, 50)

    def test_resize_invalid_size(self, runner, tmp_image_file):
        result = runner.invoke(cli, ["image", "resize", tmp_image_file, "huge"])

        assert result.exit_code == 2
        assert "Invalid size" in result.output

    def test_thumbnail_outbound(self, runner, tmp_image_file, tmp_path):
        target = tmp_path / "thumb.jpg"

        result = runner.invoke(
            cli,
            ["image", "thumbnail", tmp_image_file, "40", "-m", "outbound", "-o", str(target), "-q", "80"],
        )

        assert result.exit_code == 0
        assert _size(target) == (40, 40)

    def test_crop(self, runner, tmp_image_file, tmp_path):
        target = tmp_path / "crop.png"

        result = runner.invoke(
            cli, ["image", "crop", tmp_image_file, "10", "10", "30x20", "-o", str(target)]
        )

        assert result.exit_code == 0
        assert _size(target) == (30, 20)

    def test_rotate(self, runner, tmp_image_file):
        result = runner.invoke(cli, ["image", "rotate", tmp_image_file, "90"])

        assert result.exit_code == 0
        assert _size(tmp_image_file) == (100, 200)

    def test_watermark(self, runner, tmp_image_file, tmp_watermark_file, tmp_path):
        target = tmp_path / "marked.png"

        result = runner.invoke(
            cli,
            [
                "image",
                "watermark",
                tmp_image_file,
                "--mark",
                tmp_watermark_file,
                "-p",
                "top-left",
                "-o",
                str(target),
            ],
        )

        assert result.exit_code == 0
        with Image.open(target) as image:
            assert image.convert("RGB").getpixel((2, 2)) == (0, 255, 0)


class TestMarkupCommands:
    """Tests for the markup command group."""

    def test_render_markdown_file(self, runner, tmp_path):
        source = tmp_path / "post.md"
        source.write_text("Hello **@alice**", encoding="utf-8")

        result = runner.invoke(cli, ["markup", "render", str(source), "--parser", "markdown"])

        assert result.exit_code == 0
        assert 'href="/user/profile/alice"' in result.output
        assert "<strong>" in result.output

    def test_render_text_from_stdin(self, runner):
        result = runner.invoke(cli, ["markup", "render", "-r", "text"], input="<i>#news</i>")

        assert result.exit_code == 0
        assert "&lt;i&gt;" in result.output

    def test_render_without_filters(self, runner):
        result = runner.invoke(cli, ["markup", "render", "--no-filters"], input="@alice")

        assert result.exit_code == 0
        assert result.output.strip() == "@alice"

    def test_render_unknown_parser(self, runner):
        result = runner.invoke(cli, ["markup", "render", "-p", "bbcode"], input="x")

        assert result.exit_code == 1
        assert "Unknown parser" in result.output


class TestFormCommands:
    """Tests for the form command group."""

    def test_registration_json(self, runner):
        result = runner.invoke(cli, ["form", "registration", "--json", "--redirect", "/home"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        names = [field["name"] for field in data["fields"]]
        assert "captcha" in names
        redirect = next(field for field in data["fields"] if field["name"] == "redirect")
        assert redirect["value"] == "/home"

    def test_registration_table(self, runner):
        result = runner.invoke(cli, ["form", "registration"])

        assert result.exit_code == 0
        assert "identity" in result.output

    def test_captcha_off_from_config_file(self, runner, tmp_path):
        config_file = tmp_path / "site.toml"
        config_file.write_text("[registration]\ncaptcha = false\n")

        result = runner.invoke(
            cli, ["--config-file", str(config_file), "form", "registration", "--json"]
        )

        assert result.exit_code == 0
        names = [field["name"] for field in json.loads(result.output)["fields"]]
        assert "captcha" not in names


class TestConfigCommands:
    """Tests for the config command group."""

    def test_show(self, runner):
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "[image]" in result.output
        assert "[registration]" in result.output

    def test_init(self, runner, tmp_path):
        target = tmp_path / "sitekit.toml"

        result = runner.invoke(cli, ["config", "init", "-o", str(target)])

        assert result.exit_code == 0
        assert target.exists()

    def test_init_existing_needs_force(self, runner, tmp_path):
        target = tmp_path / "sitekit.toml"
        target.write_text("")

        result = runner.invoke(cli, ["config", "init", "-o", str(target)])
        assert result.exit_code == 1
        assert "--force" in result.output

        result = runner.invoke(cli, ["config", "init", "-o", str(target), "--force"])
        assert result.exit_code == 0

    def test_path(self, runner):
        result = runner.invoke(cli, ["config", "path"])

        assert result.exit_code == 0
        assert "sitekit.toml" in result.output
