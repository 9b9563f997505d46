"""CLI entry point for shipyard."""

import sys

import click
import structlog
from pydantic import ValidationError

from shipyard.cli import app_group, pipeline_group
from shipyard.config.settings import ShipyardSettings
from shipyard.exceptions import ConfigurationError
from shipyard.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=None,
    envvar="SHIPYARD_CONFIG",
    help="Path to a YAML settings file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (overrides the settings file)",
)
@click.version_option(package_name="shipyard")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """shipyard: bootstrap continuous-delivery pipelines for your applications."""
    try:
        settings = ShipyardSettings.from_yaml(config) if config else ShipyardSettings()
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(click.style(f"Error: invalid settings: {e}", fg="red"), err=True)
        sys.exit(1)

    configure_logging(log_level or settings.log_level)
    log.debug("settings_loaded", config=config, store=str(settings.store_path))
    ctx.obj = {"settings": settings}


cli.add_command(pipeline_group)
cli.add_command(app_group)


if __name__ == "__main__":
    cli()
