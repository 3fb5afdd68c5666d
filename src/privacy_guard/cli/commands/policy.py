"""Policy command group for privacy-guard CLI.

Provides policy inspection subcommands. Reads the policy file directly;
the service does not need to be running.
"""

import json
import sys
from pathlib import Path

import click

from privacy_guard.exceptions import MalformedTaxonomy
from privacy_guard.pdp.taxonomy import PolicyTree
from privacy_guard.utils.policy import build_policy_trees, get_policy_path, load_policy

_PATH_OPTION = click.option(
    "--path",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to policy file (default: OS config location)",
)


def _load_trees(path: Path | None) -> tuple[Path, PolicyTree, PolicyTree]:
    policy_path = path or get_policy_path()
    try:
        attributes, purposes = build_policy_trees(load_policy(policy_path))
    except (FileNotFoundError, ValueError, MalformedTaxonomy) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    return policy_path, attributes, purposes


def _tree_lines(tree: PolicyTree) -> list[str]:
    lines = []
    for node in tree:
        depth = len(tree.ancestors(node.id))
        lines.append(f"{'  ' * depth}{node.id} ({node.name}) [{node.left}, {node.right}]")
    return lines


@click.group()
def policy() -> None:
    """Policy management commands."""
    pass


@policy.command("validate")
@_PATH_OPTION
def policy_validate(path: Path | None) -> None:
    """Validate policy file.

    Checks the policy file for:
    - Valid JSON syntax
    - Schema validation
    - Consistent attribute and purpose trees (ids, parents, intervals)

    Exit codes:
        0: Policy is valid
        1: Policy is invalid or not found
    """
    policy_path, attributes, purposes = _load_trees(path)
    click.echo(f"✓ Policy valid: {policy_path}")
    click.echo(f"  {len(attributes)} attribute{'s' if len(attributes) != 1 else ''}")
    click.echo(f"  {len(purposes)} purpose{'s' if len(purposes) != 1 else ''}")


@policy.command("path")
def policy_path_cmd() -> None:
    """Show policy file path."""
    path = get_policy_path()
    click.echo(str(path))

    if not path.exists():
        click.echo("(file does not exist - run 'privacy-guard init' to create)", err=True)


@policy.command("show")
@_PATH_OPTION
@click.option("--json", "as_json", is_flag=True, help="Output nodes as JSON")
def policy_show(path: Path | None, as_json: bool) -> None:
    """Show both taxonomies with their nested-set intervals."""
    _, attributes, purposes = _load_trees(path)

    if as_json:
        data = {
            "attributes": [node.model_dump() for node in attributes],
            "purposes": [node.model_dump() for node in purposes],
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo("Attributes:")
    for line in _tree_lines(attributes):
        click.echo(f"  {line}")
    click.echo("\nPurposes:")
    for line in _tree_lines(purposes):
        click.echo(f"  {line}")
