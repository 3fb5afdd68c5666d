"""Benchmark command for privacy-guard CLI.

Runs the latency comparison in-process; no service needs to be running.
"""

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from privacy_guard.benchmark import run_benchmark, sample_records
from privacy_guard.constants import DEFAULT_BENCHMARK_ITERATIONS
from privacy_guard.exceptions import PrivacyGuardError
from privacy_guard.pdp.policy import create_default_policy
from privacy_guard.utils.policy import load_policy


@click.command()
@click.option(
    "--iterations",
    "-n",
    type=click.IntRange(min=1),
    default=DEFAULT_BENCHMARK_ITERATIONS,
    help=f"Timed calls per scenario (default: {DEFAULT_BENCHMARK_ITERATIONS})",
)
@click.option(
    "--path",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Policy file to benchmark (default: built-in default policy)",
)
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
def benchmark(iterations: int, path: Path | None, as_json: bool) -> None:
    """Compare decision latency: cache hit, cache miss, no cache, flat.

    The sample app and user reference ids from the default policy; a custom
    policy must define them too.
    """
    app, preference = sample_records()
    try:
        policy = load_policy(path) if path else create_default_policy()
        results = run_benchmark(policy, app, preference, iterations)
    except (ValueError, PrivacyGuardError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        data = [
            {
                "scenario": r.scenario,
                "result": r.result.value,
                "iterations": r.iterations,
                **asdict(r.stats),
            }
            for r in results
        ]
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"{iterations} iterations per scenario (latency in ms)\n")
    header = f"{'scenario':<12} {'result':<7} {'mean':>9} {'p50':>9} {'p95':>9} {'p99':>9} {'min':>9} {'max':>9}"
    click.echo(header)
    click.echo("-" * len(header))
    for r in results:
        s = r.stats
        click.echo(
            f"{r.scenario:<12} {r.result.value:<7} "
            f"{s.mean:>9.4f} {s.p50:>9.4f} {s.p95:>9.4f} {s.p99:>9.4f} {s.min:>9.4f} {s.max:>9.4f}"
        )
