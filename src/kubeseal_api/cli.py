#!/usr/bin/env python
"""Command-line interface for kubeseal-api.

This module provides the entry point that loads the settings, configures
logging and serves the application with uvicorn.
"""

import shutil

import click
import uvicorn
from icecream import ic
from pydantic import ValidationError

from kubeseal_api import __version__, console
from kubeseal_api.app import create_app
from kubeseal_api.config import Settings


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying command-line overrides.

    Args:
        **overrides: Setting values given on the command line; None values are ignored.

    Returns:
        The validated settings.

    Raises:
        click.ClickException: If any setting is invalid.

    """
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from None


@click.command(help="Serve an HTTP API that seals Kubernetes secrets with kubeseal")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--host", required=False, help="address to bind [env: SERVER_HOST]")
@click.option("--port", "-p", required=False, type=int, help="port to listen on [env: SERVER_PORT]")
@click.option("--log-level", required=False, help="log verbosity [env: LOG_LEVEL]")
def cli(
    version: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    log_level: str | None,
) -> None:
    """Process CLI arguments and run the server.

    Args:
        version: Print version and exit.
        debug: Enable debug output.
        host: Address to bind.
        port: Port to listen on.
        log_level: Log verbosity.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    settings = load_settings(
        server_host=host,
        server_port=port,
        log_level="debug" if debug else log_level,
    )
    console.configure_logging(settings.log_level)
    ic(settings)

    if shutil.which(settings.kubeseal_binary) is None:
        console.warning(
            f"kubeseal binary {console.highlight(settings.kubeseal_binary)} not found; "
            "seal requests will fail until it is installed"
        )

    console.summary_panel(
        f"kubeseal-api {__version__}",
        {
            "Listen": f"{settings.server_host}:{settings.server_port}",
            "kubeseal": settings.kubeseal_binary,
            "Log level": settings.log_level,
            "CORS origins": ", ".join(settings.cors_allow_origins),
        },
    )

    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    cli()
