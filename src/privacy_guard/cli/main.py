"""Main CLI entry point for privacy-guard.

Defines the CLI group and registers all subcommands.

Commands:
    init       - Create configuration and default policy
    serve      - Run the HTTP API
    policy     - Policy commands
        validate - Validate policy file and build both trees
        path     - Show policy file path
        show     - Show both taxonomies with intervals
    evaluate   - Ask the running service for a decision
    cache      - Decision cache commands
        stats    - Show cache statistics
        clear    - Drop every cached decision
    benchmark  - Compare decision latencies locally

Usage:
    privacy-guard -h, --help      Show help message
    privacy-guard -v, --version   Show version

Subcommand help:
    privacy-guard COMMAND -h      Show help for a specific command
"""

import sys

import click

from privacy_guard import __version__

from .commands.benchmark import benchmark
from .commands.cache import cache
from .commands.evaluate import evaluate
from .commands.init import init
from .commands.policy import policy
from .commands.serve import serve


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  privacy-guard init --log-dir ~/privacy-guard-logs
  privacy-guard policy validate
  privacy-guard serve

Querying a running service:
  privacy-guard evaluate APP_ID USER_ID
  privacy-guard cache stats
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """privacy-guard: Privacy compliance decisions for apps and users."""
    if version:
        click.echo(f"privacy-guard {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(init)
cli.add_command(serve)
cli.add_command(policy)
cli.add_command(evaluate)
cli.add_command(cache)
cli.add_command(benchmark)


def main() -> None:
    """CLI entry point."""
    cli()
