"""Main CLI entry point for booking-service management commands."""

import click

from booking_service.cli.commands import database, server
from booking_service.infra.logging import setup_logging


@click.group()
@click.version_option(version="1.0.0", prog_name="booking-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Booking Service CLI.

    \b
    Commands:
      serve      Run the service with signal-driven graceful shutdown
      dev        Development server with auto-reload
      db         Database connectivity and schema
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(server.dev)
cli.add_command(database.db)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
