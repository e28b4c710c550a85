"""
sitekit CLI - content building blocks for websites
"""

from typing import Optional

import click

from sitekit import __version__

from .commands import config, form, image, markup


@click.group()
@click.version_option(version=__version__, prog_name="sitekit")
@click.option("--verbose", "-v", count=True, help="Increase log output (-v info, -vv debug)")
@click.option("--config-file", "-c", default=None, help="Explicit configuration file")
def cli(verbose: int, config_file: Optional[str]) -> None:
    """sitekit - image processing, markup rendering and forms

    Use 'sitekit COMMAND --help' for more information on a command.
    """
    from sitekit.core.logger import set_level

    if config_file:
        from sitekit.cli.progress import print_error
        from sitekit.cli.service_helpers import services
        from sitekit.core.config import set_config

        result = services.config.load_config(config_file)
        if not result.success:
            print_error(result.error)
            raise SystemExit(1)
        set_config(result.data)

    if verbose:
        set_level("DEBUG" if verbose > 1 else "INFO")
    else:
        from sitekit.core.config import get_config

        set_level(get_config().logging.get("level", "WARNING"))


# Register command groups
cli.add_command(config)
cli.add_command(form)
cli.add_command(image)
cli.add_command(markup)


if __name__ == "__main__":
    cli()
