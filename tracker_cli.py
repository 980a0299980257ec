"""Mini README: Entry point CLI for running the sales tracker.

Commands:
    * run - start the FastAPI application with uvicorn.
    * migrate - bring the database schema up to date and exit.

Both commands read ``SALESTRACKER_*`` settings. ``run`` builds the application
through its factory, so migrations are applied before the server accepts
requests and a migration failure stops the process.
"""

from __future__ import annotations

import typer
import uvicorn

from salestracker.configuration import get_settings
from salestracker.logging_utils import configure_root_logger
from salestracker.storage import MigrationError, apply_migrations, create_engine_from_settings

cli = typer.Typer(help="Run and maintain the sales tracker service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload even in development)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 wildcard, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting sales tracker on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}/web/"
    )
    uvicorn.run(
        "salestracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=settings.reload_enabled and not production,
    )


@cli.command()
def migrate() -> None:
    """Apply pending schema migrations to the configured database."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    engine = create_engine_from_settings(settings)
    try:
        version = apply_migrations(engine)
    except MigrationError as error:
        typer.echo(f"Migration failed: {error}", err=True)
        raise typer.Exit(code=1) from error
    finally:
        engine.dispose()
    typer.echo(f"Database schema at version {version}.")


if __name__ == "__main__":
    cli()
