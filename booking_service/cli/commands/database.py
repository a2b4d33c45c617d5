"""Database commands.

Example:
    booking-service db check --retries 3
    booking-service db create-schema
"""

import sys

import click

from booking_service.cli.utils import coro, details, error, info, success
from booking_service.utils.retry import RetryError


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@click.option("--retries", default=1, type=int, show_default=True, help="Connection attempts")
@coro
async def check(retries: int) -> None:
    """Verify the database accepts connections."""
    from booking_service.infra.database import get_database

    database = get_database()
    info("Checking database connectivity")
    details({"url": database.safe_url, "driver": database.engine.dialect.driver, "attempts": retries})
    try:
        await database.connect(max_retries=retries, initial_delay=0.5)
    except RetryError as e:
        error(f"Database unreachable after {e.attempts} attempt(s): {e.last_exception}")
        sys.exit(1)
    finally:
        await database.disconnect()
    success("Database connected successfully!")


@db.command(name="create-schema")
@coro
async def create_schema() -> None:
    """Create all tables (local SQLite and test databases; production uses migrations)."""
    from booking_service.features.models import __all__ as model_names
    from booking_service.infra.database import get_database

    database = get_database()
    info(f"Creating tables on: {database.safe_url}")
    try:
        await database.create_schema()
    finally:
        await database.disconnect()
    success(f"Schema created for {len(model_names)} models")
