"""Command-line interface for CloudAuth."""

import asyncio

import click

from cloudauth import __version__
from cloudauth.core.config import get_settings
from cloudauth.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="CloudAuth")
def cli() -> None:
    """CloudAuth - member signup, login and token reissue service.

    Configuration is read from CLOUDAUTH_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers", type=int, default=None, help="Number of worker processes (overrides config)"
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the CloudAuth server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)
    get_logger(__name__).info(
        "Starting CloudAuth server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "cloudauth.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create tables and seed the default skill tags.

    Use migrations (alembic upgrade head) in production.
    """
    from cloudauth.infrastructure.persistence.database import close_database, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo("ERROR: Running in production mode. Use migrations instead of init-db.", err=True)
        raise SystemExit(1)

    if not force:
        click.confirm("This will create all database tables. Continue?", abort=True, default=False)

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

    asyncio.run(initialize())


@cli.command()
@click.argument("names", nargs=-1, required=True)
def add_tags(names: tuple[str, ...]) -> None:
    """Create skill tags NAMES that do not exist yet."""
    from cloudauth.infrastructure.persistence.database import close_database, get_db_manager
    from cloudauth.infrastructure.persistence.repositories import SkillTagRepository

    configure_logging(get_settings())

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                tags = await SkillTagRepository(session).ensure(names)
                await session.commit()
        finally:
            await close_database()
        for tag in tags:
            click.echo(f"  {tag.id:>4}  {tag.name}")

    asyncio.run(create())


@cli.command()
def purge_tokens() -> None:
    """Delete refresh tokens that have already expired."""
    from cloudauth.infrastructure.persistence.database import close_database, get_db_manager
    from cloudauth.infrastructure.persistence.repositories import RefreshTokenRepository

    configure_logging(get_settings())
    logger = get_logger(__name__)

    async def purge() -> int:
        db = get_db_manager()
        try:
            async with db.session() as session:
                deleted = await RefreshTokenRepository(session).delete_expired()
                await session.commit()
        finally:
            await close_database()
        return deleted

    deleted = asyncio.run(purge())
    logger.info("Expired refresh tokens purged", count=deleted)
    click.echo(f"Deleted {deleted} expired refresh token(s).")


@cli.command()
def info() -> None:
    """Display CloudAuth configuration."""
    settings = get_settings()

    click.echo(f"""
CloudAuth v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  SQLite FKs:    {settings.db_sqlite_foreign_keys}

Tokens:
  Access Exp:   {settings.access_token_expire_minutes} minutes
  Refresh Exp:  {settings.refresh_token_expire_days} days

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Entry point for the ``cloudauth`` command and ``python -m cloudauth``."""
    cli()


if __name__ == "__main__":
    main()
