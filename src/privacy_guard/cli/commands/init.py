"""Init command for privacy-guard CLI.

Writes privacy_guard_config.json and a default policy.json to the
OS-appropriate config directory.
"""

import sys
from pathlib import Path
from typing import Literal, cast

import click

from privacy_guard.config import ApiConfig, AppConfig, LoggingConfig, get_config_path
from privacy_guard.constants import DEFAULT_API_HOST, DEFAULT_API_PORT, DEFAULT_SERVICE_ID, MAX_API_PORT, MIN_API_PORT
from privacy_guard.pdp import create_default_policy
from privacy_guard.utils.history_logging import log_policy_created
from privacy_guard.utils.policy import get_policy_path, save_policy


def _create_policy(config: AppConfig, policy_path: Path) -> str:
    """Write the default policy and record it in policy_history.jsonl.

    Returns:
        The new policy version.
    """
    policy = create_default_policy()
    save_policy(policy, policy_path)
    return log_policy_created(
        config.logging.policy_history_path,
        policy_path,
        policy,
        source="cli_init",
    )


@click.command()
@click.option("--log-dir", required=True, help="Base directory for privacy_guard_logs/")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO"], case_sensitive=False),
    default="INFO",
    help="System log verbosity (default: INFO). Decision logs are always written.",
)
@click.option("--host", default=DEFAULT_API_HOST, help=f"API bind address (default: {DEFAULT_API_HOST})")
@click.option(
    "--port",
    type=click.IntRange(MIN_API_PORT, MAX_API_PORT),
    default=DEFAULT_API_PORT,
    help=f"API port (default: {DEFAULT_API_PORT})",
)
@click.option(
    "--service-id",
    default=DEFAULT_SERVICE_ID,
    help="Name reported in API responses (overridden by $SERVICE_ID)",
)
@click.option("--force", is_flag=True, help="Overwrite existing config and policy")
def init(log_dir: str, log_level: str, host: str, port: int, service_id: str, force: bool) -> None:
    """Initialize configuration and default policy.

    Creates files at the OS-appropriate location:
    - macOS: ~/Library/Application Support/privacy-guard/
    - Linux: ~/.config/privacy-guard/
    - Windows: C:\\Users\\<user>\\AppData\\Local\\privacy-guard/

    An existing policy.json is kept unless --force is given.
    """
    config_path = get_config_path()
    policy_path = get_policy_path()

    if config_path.exists() and not force:
        click.echo(f"Error: Config already exists at {config_path}. Use --force to overwrite.", err=True)
        sys.exit(1)

    config = AppConfig(
        logging=LoggingConfig(
            log_dir=log_dir,
            log_level=cast(Literal["DEBUG", "INFO"], log_level.upper()),
        ),
        api=ApiConfig(host=host, port=port),
        service_id=service_id,
    )

    try:
        config.save_to_file(config_path)
        click.echo(f"Configuration saved to {config_path}")

        if policy_path.exists() and not force:
            click.echo(f"Keeping existing policy at {policy_path}")
        else:
            version = _create_policy(config, policy_path)
            click.echo(f"Policy saved to {policy_path} ({version})")
    except OSError as e:
        click.echo(f"Error: Failed to save configuration: {e}", err=True)
        sys.exit(1)

    click.echo("\nRun 'privacy-guard serve' to start the API.")
