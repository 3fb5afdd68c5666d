"""Cache command group for privacy-guard CLI.

Talks to the running service; the decision cache lives in its memory.
"""

import json

import click

from ..api_client import api_request


@click.group()
def cache() -> None:
    """Decision cache commands."""
    pass


@cache.command("stats")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON response")
def cache_stats(as_json: bool) -> None:
    """Show decision cache statistics.

    Counts include expired entries; expiry is checked on lookup.
    """
    data = api_request("GET", "/api/cache/stats")

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    assert isinstance(data, dict)
    click.echo(f"Service: {data.get('service')}")
    click.echo(f"  Entries: {data.get('total_entries', 0)}")
    click.echo(f"  Grant: {data.get('grant_count', 0)}")
    click.echo(f"  Deny: {data.get('deny_count', 0)}")
    click.echo(f"  Users: {data.get('users', 0)}")
    click.echo(f"  Created in last hour: {data.get('last_hour', 0)}")
    click.echo(f"  Created in last 24 hours: {data.get('last_24_hours', 0)}")


@cache.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def cache_clear(yes: bool) -> None:
    """Drop every cached decision."""
    if not yes and not click.confirm("Clear all cached decisions?", default=False):
        click.echo("Aborted.")
        return

    data = api_request("DELETE", "/api/cache")
    assert isinstance(data, dict)
    click.echo(f"Cleared {data.get('deleted_count', 0)} cached decision(s)")
