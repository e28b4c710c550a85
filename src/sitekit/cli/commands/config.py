"""Configuration management commands."""

import click

SECTIONS = ["image", "markup", "user", "registration", "logging"]


@click.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
def config_show() -> None:
    """Show current configuration."""
    from rich.markup import escape

    from sitekit.cli.progress import console
    from sitekit.cli.service_helpers import handle_result, services

    config_obj = handle_result(services.config.get_config())

    console.print("\n[bold]Current Configuration[/bold]")
    if config_obj._source:
        console.print(f"[dim]Source: {config_obj._source}[/dim]\n")
    else:
        console.print("[dim]Source: defaults (no config file found)[/dim]\n")

    for section_name in SECTIONS:
        section = getattr(config_obj, section_name, {})
        if section:
            console.print(f"[bold blue]\\[{section_name}][/bold blue]")
            for key, value in section.items():
                console.print(f"  {key} = {escape(repr(value))}")
            console.print()


@config.command("init")
@click.option("--output", "-o", default="sitekit.toml", help="Output file path")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing file")
def config_init(output: str, force: bool) -> None:
    """Create a default configuration file."""
    from sitekit.cli.progress import print_error, print_success
    from sitekit.cli.service_helpers import services

    result = services.config.create_default_config(output, force=force)

    if not result.success:
        print_error(result.error)
        if "already exists" in result.error:
            click.echo("Use --force to overwrite.")
        raise SystemExit(1)

    print_success(f"Created configuration file: {output}")


@config.command("path")
def config_path() -> None:
    """Show configuration file search paths."""
    from pathlib import Path

    from sitekit.cli.progress import console
    from sitekit.cli.service_helpers import services

    console.print("\n[bold]Configuration File Search Paths[/bold]\n")
    console.print("Files are searched in order (first found wins):\n")

    active_result = services.config.find_config_file()
    active_config = Path(active_result.data) if active_result.success and active_result.data else None

    locations_result = services.config.get_config_locations()
    if locations_result.success:
        for i, location in enumerate(Path(loc) for loc in locations_result.data):
            status = (
                "[green]✓ ACTIVE[/green]"
                if location == active_config
                else ("[dim]exists[/dim]" if location.exists() else "[dim]not found[/dim]")
            )
            console.print(f"  {i + 1}. {location} {status}")

    console.print()
