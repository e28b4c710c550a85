"""Markup rendering commands."""

from typing import Optional, Tuple

import click


@click.group()
def markup() -> None:
    """Render user content to HTML."""
    pass


@markup.command("render")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--renderer",
    "-r",
    default="html",
    type=click.Choice(["html", "text"]),
    help="html: content is (or becomes) HTML, text: plain text",
)
@click.option("--parser", "-p", default=None, help="Parser for the html renderer, e.g. markdown")
@click.option(
    "--filter",
    "-f",
    "filters",
    multiple=True,
    help="Filter to apply (repeatable; default: configured filters)",
)
@click.option("--no-filters", is_flag=True, help="Apply no filters")
def markup_render(
    source,
    renderer: str,
    parser: Optional[str],
    filters: Tuple[str, ...],
    no_filters: bool,
) -> None:
    """Render SOURCE (a file, or - for stdin) and print the HTML.

    Examples:
        sitekit markup render post.md --parser markdown
        echo "hi @alice" | sitekit markup render -r text
    """
    from sitekit.cli.service_helpers import handle_result, services

    if no_filters:
        selected = []
    else:
        selected = list(filters) or None

    html = handle_result(
        services.markup.render(source.read(), renderer=renderer, parser=parser, filters=selected)
    )
    click.echo(html)
