"""Command-line interface for Ledgerly.

This module provides the CLI commands for running and managing
the Ledgerly application.
"""

import asyncio
from typing import NoReturn

import click

from ledgerly.core.config import get_settings
from ledgerly.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="Ledgerly")
def cli() -> None:
    """Ledgerly - small-business accounting backend."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the Ledgerly API server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo("Error: SQLite does not support multiple worker processes", err=True)
        raise SystemExit(1)

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting Ledgerly server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "ledgerly.infrastructure.api.app:app",
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
    """Create tables and seed the Admin and User roles.

    Tables are only created in development; elsewhere run migrations first.
    """
    from ledgerly.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if not force:
        click.confirm(
            "This will create database tables and seed system roles. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Admin email (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Admin password (prompts if not provided)",
)
@click.option("--company", type=str, default=None, help="Company name")
def create_admin(email: str | None, password: str | None, company: str | None) -> None:
    """Create a user with the Admin role."""
    from ledgerly.core.exceptions import LedgerlyError
    from ledgerly.domain.services import UserService
    from ledgerly.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Admin email", type=str)
    if "@" not in email or "." not in email.split("@")[-1]:
        click.echo("Error: Invalid email format", err=True)
        raise SystemExit(1)
    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                user = await UserService(session).ensure_admin(
                    email=email,
                    password=password,
                    company_name=company,
                )
                await session.commit()
        finally:
            await db.disconnect()

        if user is None:
            click.echo(f"Error: A user with email {email} already exists", err=True)
            raise SystemExit(1)

        click.echo(f"\nAdmin created successfully!\n  User ID: {user.id}\n  Email:   {user.email}\n")
        logger.info("Admin created via CLI", user_id=user.id, email=user.email)

    try:
        asyncio.run(create())
    except LedgerlyError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1) from e


@cli.command()
def roles() -> None:
    """List roles in directory order with their user counts."""
    from ledgerly.domain.services import RoleDirectory
    from ledgerly.infrastructure.persistence.database import get_db_manager

    configure_logging(get_settings())

    async def fetch():
        db = get_db_manager()
        try:
            async with db.session() as session:
                return await RoleDirectory(session).list_roles()
        finally:
            await db.disconnect()

    summaries = asyncio.run(fetch())
    if not summaries:
        click.echo("No roles found. Run 'ledgerly init-db' first.")
        return

    click.echo(f"{'Role':<24}{'System':<8}{'Users':>6}{'Features':>10}")
    for summary in summaries:
        click.echo(
            f"{summary.name:<24}{'yes' if summary.is_system else 'no':<8}"
            f"{summary.user_count:>6}{summary.permission_count:>10}"
        )


@cli.command()
def info() -> None:
    """Display Ledgerly configuration."""
    settings = get_settings()

    click.echo(f"""
Ledgerly v{settings.app_version}
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
  Echo:         {settings.db_echo}

Invoicing:
  Tax Rate:     {settings.invoice_tax_rate:.2%}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the `ledgerly` command and `python -m ledgerly`."""
    cli()


if __name__ == "__main__":
    main()
