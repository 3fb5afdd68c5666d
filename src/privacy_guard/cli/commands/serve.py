"""Serve command for privacy-guard CLI.

Builds the service from configuration and runs the HTTP API with uvicorn.
"""

import sys

import click
import uvicorn

from privacy_guard import __version__
from privacy_guard.api import create_api_app
from privacy_guard.config import AppConfig, get_config_path
from privacy_guard.constants import MAX_API_PORT, MIN_API_PORT
from privacy_guard.exceptions import MalformedTaxonomy
from privacy_guard.service import create_service


@click.command()
@click.option("--host", help="Override the configured bind address")
@click.option(
    "--port",
    type=click.IntRange(MIN_API_PORT, MAX_API_PORT),
    help="Override the configured port",
)
def serve(host: str | None, port: int | None) -> None:
    """Start the HTTP API.

    Loads configuration and policy from the OS-appropriate location.
    Refuses to start if the policy taxonomies are malformed.
    """
    try:
        config = AppConfig.load_from_files(get_config_path())
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        service = create_service(config)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except (ValueError, MalformedTaxonomy) as e:
        click.echo(f"Error: Invalid policy: {e}", err=True)
        click.echo("Run 'privacy-guard policy validate' for details.", err=True)
        sys.exit(1)

    bind_host = host or config.api.host
    bind_port = port or config.api.port

    click.echo(f"privacy-guard v{__version__}", err=True)
    click.echo(f"Service: {service.service_id}", err=True)
    click.echo(f"Policy version: {service.policy_version}", err=True)
    click.echo(f"Listening on http://{bind_host}:{bind_port}", err=True)
    click.echo("-" * 50, err=True)

    uvicorn.run(
        create_api_app(service),
        host=bind_host,
        port=bind_port,
        log_level="debug" if config.logging.log_level == "DEBUG" else "info",
    )
