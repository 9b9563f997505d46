"""``shipyard app`` commands."""

import sys

import click
import structlog

from shipyard.cli.common import build_store, build_workspace, get_settings
from shipyard.exceptions import ShipyardError

log = structlog.get_logger(__name__)


@click.group(name="app")
def app_group() -> None:
    """Work with applications."""
    pass


@app_group.command(name="link")
@click.argument("name")
@click.pass_context
def link_command(ctx: click.Context, name: str) -> None:
    """Link the current workspace to application NAME.

    The application must already exist in the configuration store.

    Examples:

        shipyard app link demo
    """
    settings = get_settings(ctx)
    try:
        build_store(settings).get_application(name)
        path = build_workspace(settings).link(name)
    except ShipyardError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        log.debug("app_link_error", exc_info=True)
        sys.exit(1)

    click.echo(click.style(f"Linked workspace to application {name}", fg="green"))
    click.echo(f"  {path}")
