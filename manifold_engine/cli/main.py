"""
Entry point of the ``manifold`` command.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import click

from .. import __version__
from ..config import EngineConfig
from ..observability import configure_logging, set_correlation_id
from .commands.convert import convert
from .commands.detect import detect
from .commands.validate import validate


@click.group()
@click.version_option(__version__, prog_name="manifold")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to MANIFOLD_LOG_LEVEL or INFO)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Detect, convert and validate web app manifests."""
    config = EngineConfig(log_level=log_level)
    try:
        config.validate()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(config.log_level_value)
    set_correlation_id()
    ctx.obj = config


cli.add_command(detect)
cli.add_command(convert)
cli.add_command(validate)


def main() -> None:
    cli()
