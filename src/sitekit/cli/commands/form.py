"""Form description commands."""

import json
from typing import Optional

import click


@click.group()
def form() -> None:
    """Show form definitions."""
    pass


@form.command("registration")
@click.option("--redirect", default=None, help="Redirect query parameter to prefill")
@click.option("--json", "as_json", is_flag=True, help="Print the form as JSON")
def form_registration(redirect: Optional[str], as_json: bool) -> None:
    """Show the user registration form built from the configuration."""
    from sitekit.cli.progress import print_table
    from sitekit.forms import build_registration_form

    query = {"redirect": redirect} if redirect else {}
    definition = build_registration_form(query=query)

    if as_json:
        click.echo(json.dumps(definition.to_dict(), indent=2))
        return

    rows = []
    for field in definition.fields:
        rules = ", ".join(v["name"] for v in field.validators)
        rows.append([field.name, field.type, "yes" if field.required else "", rules])
    print_table(
        f"Form '{definition.name}' ({definition.method.upper()} {definition.action})",
        ["Field", "Type", "Required", "Validators"],
        rows,
    )
