#!/usr/bin/env python3
"""
``quill-migrate``: apply, roll back and inspect the users/posts schema migrations.
"""

import asyncio
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import click
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import Script, ScriptDirectory
from quill import __version__
from quill.database.connection import get_database_url, to_async_url
from quill.logging import configure_logging, get_logger

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parents[3]


def get_alembic_config(database_url: str | None = None) -> Config:
    """
    Load ``alembic.ini`` from the project root.

    ``database_url`` overrides QUILL_DATABASE_URL / settings for this config only.
    """
    alembic_ini = PROJECT_DIR / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_DIR / "alembic"))
    if database_url:
        config.attributes["database_url"] = database_url
    return config


@dataclass
class MigrationStatus:
    current: tuple[str, ...]
    head: str | None
    pending: list[Script] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return not self.pending


async def current_revisions(database_url: str) -> tuple[str, ...]:
    """Read the revision ids stamped in ``alembic_version`` (empty when unmigrated)."""
    engine = create_async_engine(to_async_url(database_url), poolclass=NullPool)
    try:
        async with engine.connect() as conn:
            return await conn.run_sync(
                lambda sync_conn: MigrationContext.configure(sync_conn).get_current_heads()
            )
    finally:
        await engine.dispose()


def migration_status(config: Config) -> MigrationStatus:
    """Compare the database's stamped revision with the migration scripts."""
    database_url = config.attributes.get("database_url") or get_database_url()
    current = asyncio.run(current_revisions(database_url))
    scripts = ScriptDirectory.from_config(config)

    pending = []
    for script in scripts.walk_revisions():
        if script.revision in current:
            break
        pending.append(script)
    pending.reverse()

    return MigrationStatus(current=current, head=scripts.get_current_head(), pending=pending)


@contextmanager
def migration_step(action: str, **fields) -> Iterator[None]:
    """Log the start and outcome of a migration command; exit 1 on failure."""
    logger.info(f"{action} started", **fields)
    try:
        yield
    except Exception as e:
        logger.error(f"{action} failed", error=str(e), **fields)
        sys.exit(1)
    logger.info(f"{action} finished", **fields)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--database-url",
    envvar="QUILL_DATABASE_URL",
    default=None,
    help="Database to migrate (default: QUILL_DATABASE_URL or settings)",
)
@click.version_option(version=__version__, prog_name="quill-migrate")
@click.pass_context
def main(ctx: click.Context, log_level: str, database_url: str | None) -> None:
    """Quill database migration management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)
    config = get_alembic_config(database_url)
    config.attributes["logging_configured"] = True
    ctx.obj = config


@main.command()
@click.argument("revision", default="head")
@click.option("--sql", is_flag=True, help="Print the SQL instead of running it")
@click.pass_obj
def upgrade(config: Config, revision: str, sql: bool) -> None:
    """Upgrade the database to REVISION (default: head)."""
    with migration_step("Upgrade", revision=revision):
        command.upgrade(config, revision, sql=sql)


@main.command()
@click.argument("revision", default="-1")
@click.pass_obj
def downgrade(config: Config, revision: str) -> None:
    """Downgrade the database to REVISION (default: one step back)."""
    with migration_step("Downgrade", revision=revision):
        command.downgrade(config, revision)


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Diff models against the database")
@click.pass_obj
def revision(config: Config, message: str, autogenerate: bool) -> None:
    """Create a new migration script."""
    with migration_step("Revision", message=message, autogenerate=autogenerate):
        command.revision(config, message=message, autogenerate=autogenerate)


@main.command()
@click.pass_obj
def status(config: Config) -> None:
    """Show the applied revision and any pending migrations; exit 1 when behind."""
    try:
        state = migration_status(config)
    except Exception as e:
        logger.error("Status check failed", error=str(e))
        sys.exit(1)

    click.echo(f"Current: {', '.join(state.current) or 'none'}")
    click.echo(f"Head:    {state.head or 'none'}")

    if state.up_to_date:
        click.echo("✓ Database is up to date")
        return

    click.echo(f"✗ {len(state.pending)} pending migration(s):")
    for script in state.pending:
        click.echo(f"  {script.revision}  {script.doc}")
    sys.exit(1)


if __name__ == "__main__":
    main()
