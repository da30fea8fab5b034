"""CLI entry point for Seminar Registry.

Commands:
- serve: Run the REST API with uvicorn
- init-db: Create the database schema and exit
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from seminar_registry.config import ConfigError, Settings, load_settings
from seminar_registry.logging import setup_logging


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="seminar-registry")
def main() -> None:
    """Seminar Registry - seminar registration, attendance and certificates."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to seminar_registry.yaml (auto-detected if not specified)",
)
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Bind port (default: from config)")
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    db_path: str | None,
    verbose: bool,
) -> None:
    """Run the REST API server."""
    import uvicorn  # noqa: PLC0415

    from seminar_registry.api import create_app  # noqa: PLC0415

    settings = _load(config_path)
    if host is not None:
        settings.server.host = host
    if port is not None:
        settings.server.port = port
    if db_path is not None:
        settings.database.path = db_path

    setup_logging(settings.logging, verbose)

    click.echo(
        f"Serving on http://{settings.server.host}:{settings.server.port} "
        f"(database: {settings.database.path})"
    )
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to seminar_registry.yaml (auto-detected if not specified)",
)
@click.option("--db", "db_path", default=None, help="SQLite database path (default: from config)")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def init_db(config_path: Path | None, db_path: str | None, verbose: bool) -> None:
    """Create the database schema and exit."""
    from seminar_registry.entity_store import EntityStore  # noqa: PLC0415

    settings = _load(config_path)
    if db_path is not None:
        settings.database.path = db_path

    setup_logging(settings.logging, verbose)

    store = EntityStore(settings.database.path)
    try:
        wal = store.database.is_wal_mode()
    finally:
        store.close()

    click.echo(f"Database initialized at {settings.database.path}")
    if not wal and settings.database.path != ":memory:":
        click.echo("  Warning: WAL mode is not enabled", err=True)


if __name__ == "__main__":
    main()
