"""Evaluate command for privacy-guard CLI.

Asks the running service for a compliance decision.
"""

import json

import click

from ..api_client import api_request


@click.command()
@click.argument("app_id")
@click.argument("user_id")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON response")
def evaluate(app_id: str, user_id: str, as_json: bool) -> None:
    """Decide whether APP_ID may process USER_ID's data."""
    data = api_request("POST", "/api/evaluate", json_data={"app_id": app_id, "user_id": user_id})

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    assert isinstance(data, dict)
    result = str(data.get("result", "deny")).upper()
    color = "green" if result == "GRANT" else "red"
    click.echo(click.style(result, fg=color, bold=True))
    click.echo(f"  Cache hit: {'yes' if data.get('cache_hit') else 'no'}")
    click.echo(f"  Latency: {data.get('latency_ms')} ms")
    click.echo(f"  Service: {data.get('service')}")
