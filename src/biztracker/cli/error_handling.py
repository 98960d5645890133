"""CLI error handling helpers."""

import logging

import click

from biztracker.domain.errors import DomainError

logger = logging.getLogger(__name__)


def fail(ctx: click.Context, message: str) -> None:
    """Print ``message`` as an error on stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a record or configuration error and exit with failure."""
    logger.debug("Command %s failed", ctx.info_name, exc_info=error)
    fail(ctx, str(error))
