#!/usr/bin/env python3
"""
Main CLI entry point for the Quill API server.
"""

import os
import sys

import click
import uvicorn

from quill import __version__
from quill.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="quill")
def cli() -> None:
    """Quill CLI - manage the server, database and session tokens."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=4000,
    type=int,
    help="Port to bind to (default: 4000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Quill API server."""

    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Quill API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app reads these at import time
    if log_level == "debug":
        os.environ["QUILL_DEBUG"] = "true"
        os.environ["QUILL_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("QUILL_DEBUG", "false")
        os.environ.setdefault("QUILL_LOG_LEVEL", log_level)

    try:
        if reload:
            uvicorn.run(
                "quill.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=log_level,
                access_log=True,
            )
        else:
            from quill.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create missing tables directly from the ORM models."""
    import asyncio

    from quill.database.connection import create_schema, dispose_database

    configure_logging()

    async def do_init():
        try:
            await create_schema()
            click.echo("✓ Database schema created")
        except Exception as e:
            logger.error("Failed to create database schema", error=str(e))
            click.echo(f"✗ Error creating schema: {e}", err=True)
            sys.exit(1)
        finally:
            await dispose_database()

    asyncio.run(do_init())


@cli.command()
def seed() -> None:
    """Reset the database to the fixture users and posts."""
    import asyncio

    from quill.database.connection import dispose_database, get_async_session
    from quill.database.seed_data import seed_database

    configure_logging()

    async def do_seed():
        try:
            async with get_async_session() as db:
                data = await seed_database(db)
            click.echo("✓ Database seeded successfully")
            click.echo(f"  User: {data.user_one.email} ({data.user_one.id})")
            click.echo(f"  Token: {data.user_one.jwt}")
        except Exception as e:
            logger.error("Failed to seed database", error=str(e))
            click.echo(f"✗ Error seeding database: {e}", err=True)
            sys.exit(1)
        finally:
            await dispose_database()

    asyncio.run(do_seed())


@cli.command()
@click.option("--user-id", help="Id of the user to sign a token for")
@click.option("--email", help="Email of the user to sign a token for")
def token(user_id: str | None, email: str | None) -> None:
    """Print a session token for an existing user."""
    import asyncio
    from uuid import UUID

    from sqlalchemy import select

    from quill.auth.factory import issue_user_token
    from quill.database.connection import dispose_database, get_async_session
    from quill.dbmodels import Users

    if bool(user_id) == bool(email):
        raise click.UsageError("Pass exactly one of --user-id or --email")

    parsed_id = None
    if user_id:
        try:
            parsed_id = UUID(user_id)
        except ValueError as e:
            raise click.BadParameter("not a UUID", param_hint="--user-id") from e

    configure_logging()

    async def do_token():
        try:
            async with get_async_session() as db:
                if parsed_id is not None:
                    user = await db.get(Users, parsed_id)
                else:
                    user = await db.scalar(
                        select(Users).where(Users.email == (email or "").strip().lower())
                    )
            if user is None:
                click.echo("✗ User not found", err=True)
                sys.exit(1)
            click.echo(await issue_user_token(user.id))
        finally:
            await dispose_database()

    asyncio.run(do_token())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
