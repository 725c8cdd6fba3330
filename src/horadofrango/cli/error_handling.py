"""CLI error reporting."""

import logging

import click

from horadofrango.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Domain errors are expected user mistakes. Any other ValueError (an
    unparseable amount or date) is also logged with its type at debug level.
    """
    if not isinstance(error, DomainError):
        logger.debug("Rejected input: %r", error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
