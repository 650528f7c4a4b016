"""CLI entry point for the inventory service.

Usage:
    inventory-api                                  # Settings from the environment
    inventory-api -h 127.0.0.1 -p 8080 -c ./cache  # Override host, port, cache dir
    inventory-api --storage sql                    # Persist records in the database
    inventory-api --reload                         # Restart on code changes
"""

import logging
import os
from typing import Optional

import typer
import uvicorn

from inventory_api.config import STORAGE_BACKENDS, Settings
from inventory_api.main import create_app

# Reloading workers build the app themselves from the environment
APP_FACTORY = "inventory_api.main:create_app"

ENV_NAMES = {
    "host": "HOST",
    "port": "PORT",
    "cache_dir": "CACHE_DIR",
    "storage": "STORAGE",
    "database_url": "DATABASE_URL",
    "log_level": "LOG_LEVEL",
    "debug": "DEBUG",
}

app = typer.Typer(
    name="inventory-api",
    help="Inventory tracking HTTP service",
    add_completion=False,
)


def _export_overrides(overrides: dict) -> None:
    """Hand CLI overrides to reloaded workers through the environment."""
    for field, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        os.environ[ENV_NAMES[field]] = str(value)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Address to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    cache: Optional[str] = typer.Option(
        None, "--cache", "-c", help="Directory for uploaded photos"
    ),
    storage: Optional[str] = typer.Option(
        None, "--storage", "-s", help=f"Storage backend: {', '.join(STORAGE_BACKENDS)}"
    ),
    database_url: Optional[str] = typer.Option(
        None, "--database-url", help="SQLAlchemy URL for the sql backend"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Logging level (DEBUG, INFO, ...)"
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Debug mode: restart on code changes"
    ),
) -> None:
    """Start the HTTP server."""
    overrides = {
        "host": host,
        "port": port,
        "cache_dir": cache,
        "storage": storage.lower() if storage else None,
        "database_url": database_url,
        "log_level": log_level.upper() if log_level else None,
        "debug": True if reload else None,
    }
    try:
        settings = Settings.from_env().with_overrides(**overrides)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger("inventory_api")
    logger.info(f"Server running at http://{settings.host}:{settings.port}")

    if settings.debug:
        _export_overrides(overrides)
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            reload=True,
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
