"""Nested-set policy taxonomy.

Each taxonomy (attributes, purposes) is a forest whose nodes carry a
pre-order interval ``(left, right)``. Ancestry reduces to interval
containment:

    A is ancestor-or-self of B  <=>  A.left <= B.left and A.right >= B.right

so "allow Health" covers "Heart rate" without walking the tree.

Example (parent links → intervals):

    location (1, 6)
    ├── gps (2, 3)
    └── ip-address (4, 5)
    contact (7, 10)
    └── email (8, 9)

Trees are built once at bootstrap and are read-only afterwards. Editing a
taxonomy means building a new tree (O(n)); queries never mutate.
"""

from __future__ import annotations

__all__ = [
    "PolicyNode",
    "PolicyTree",
]

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict

from privacy_guard.exceptions import MalformedTaxonomy, UnknownPolicyNode
from privacy_guard.pdp.policy import TaxonomyEntry


class PolicyNode(BaseModel):
    """One numbered taxonomy node.

    Attributes:
        id: Unique id within the tree.
        name: Human-readable name.
        left: Pre-order interval start.
        right: Pre-order interval end (> right of every descendant).
        parent_id: Parent node id, derived from containment. None for roots.
    """

    id: str
    name: str
    left: int
    right: int
    parent_id: str | None = None

    model_config = ConfigDict(frozen=True)

    def contains(self, other: "PolicyNode") -> bool:
        """Return True if this node is an ancestor of, or equal to, other."""
        return self.left <= other.left and self.right >= other.right


class PolicyTree:
    """Read-only nested-set tree with O(1) containment queries.

    Construct through ``build`` (parent links), ``from_intervals``
    (pre-numbered nodes) or ``from_entries`` (whatever the policy source
    supplied). The constructor validates nesting in every case.

    Attributes:
        kind: Taxonomy name used in error messages ("attribute", "purpose").
    """

    def __init__(self, nodes: Iterable[PolicyNode], kind: str = "policy") -> None:
        """Validate intervals and index nodes by id.

        Args:
            nodes: Numbered nodes in any order.
            kind: Taxonomy name for error messages.

        Raises:
            MalformedTaxonomy: If intervals are not consistently nested.
        """
        self.kind = kind
        ordered = _validate_intervals(list(nodes), kind)
        self._ordered: tuple[PolicyNode, ...] = tuple(ordered)
        self._lefts: list[int] = [node.left for node in ordered]
        self._by_id: dict[str, PolicyNode] = {node.id: node for node in ordered}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, entries: Sequence[TaxonomyEntry], kind: str = "policy") -> "PolicyTree":
        """Number a taxonomy given as parent links.

        Pre-order traversal: a node's ``left`` is assigned on first visit,
        its ``right`` after all of its children. Siblings keep input order.
        Roots are numbered one after another, the first starting at 1.

        Args:
            entries: Entries with ``parent`` links and no intervals.
            kind: Taxonomy name for error messages.

        Returns:
            Numbered PolicyTree.

        Raises:
            MalformedTaxonomy: Duplicate ids, unknown parents, cycles, or
                entries that already carry intervals.
        """
        by_id: dict[str, TaxonomyEntry] = {}
        for entry in entries:
            if entry.id in by_id:
                raise MalformedTaxonomy(f"Duplicate {kind} id: {entry.id!r}")
            if entry.has_interval:
                raise MalformedTaxonomy(
                    f"{kind.capitalize()} {entry.id!r} has an interval; build() numbers entries itself"
                )
            by_id[entry.id] = entry

        children: dict[str, list[str]] = {entry_id: [] for entry_id in by_id}
        roots: list[str] = []
        for entry in by_id.values():
            if entry.parent is None:
                roots.append(entry.id)
            elif entry.parent not in by_id:
                raise MalformedTaxonomy(
                    f"{kind.capitalize()} {entry.id!r} references unknown parent {entry.parent!r}"
                )
            else:
                children[entry.parent].append(entry.id)

        lefts: dict[str, int] = {}
        rights: dict[str, int] = {}
        counter = 0
        for root in roots:
            counter += 1
            lefts[root] = counter
            stack: list[tuple[str, Iterator[str]]] = [(root, iter(children[root]))]
            while stack:
                node_id, pending = stack[-1]
                child = next(pending, None)
                if child is None:
                    stack.pop()
                    counter += 1
                    rights[node_id] = counter
                else:
                    counter += 1
                    lefts[child] = counter
                    stack.append((child, iter(children[child])))

        # Nodes on a parent cycle are never reached from a root
        unreachable = [entry_id for entry_id in by_id if entry_id not in lefts]
        if unreachable:
            raise MalformedTaxonomy(f"{kind.capitalize()} parent cycle involving: {', '.join(sorted(unreachable))}")

        nodes = [
            PolicyNode(
                id=entry.id,
                name=entry.name,
                left=lefts[entry.id],
                right=rights[entry.id],
                parent_id=entry.parent,
            )
            for entry in by_id.values()
        ]
        return cls(nodes, kind=kind)

    @classmethod
    def from_intervals(cls, nodes: Iterable[PolicyNode], kind: str = "policy") -> "PolicyTree":
        """Load pre-numbered nodes, validating their nesting.

        Args:
            nodes: Nodes with ``left``/``right`` already assigned.
            kind: Taxonomy name for error messages.

        Raises:
            MalformedTaxonomy: If intervals overlap without containment.
        """
        return cls(nodes, kind=kind)

    @classmethod
    def from_entries(cls, entries: Sequence[TaxonomyEntry], kind: str = "policy") -> "PolicyTree":
        """Build a tree from policy-source entries in either form.

        All entries must use the same form: all parent links or all
        intervals.

        Raises:
            MalformedTaxonomy: If forms are mixed or the tree is inconsistent.
        """
        with_interval = sum(1 for entry in entries if entry.has_interval)
        if with_interval == 0:
            return cls.build(entries, kind=kind)
        if with_interval != len(entries):
            raise MalformedTaxonomy(
                f"{kind.capitalize()} taxonomy mixes parent links and intervals; use one form"
            )
        return cls.from_intervals(
            (
                PolicyNode(
                    id=entry.id,
                    name=entry.name,
                    left=entry.left,  # type: ignore[arg-type]
                    right=entry.right,  # type: ignore[arg-type]
                    parent_id=entry.parent,
                )
                for entry in entries
            ),
            kind=kind,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[PolicyNode]:
        return iter(self._ordered)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    @property
    def nodes(self) -> tuple[PolicyNode, ...]:
        """All nodes in pre-order (ascending ``left``)."""
        return self._ordered

    def get(self, node_id: str) -> PolicyNode:
        """Get a node by id.

        Raises:
            UnknownPolicyNode: If the id is not in this tree.
        """
        try:
            return self._by_id[node_id]
        except KeyError:
            raise UnknownPolicyNode(node_id, self.kind) from None

    def require(self, node_ids: Iterable[str]) -> None:
        """Check that every id exists.

        Raises:
            UnknownPolicyNode: For the first id not in this tree.
        """
        for node_id in node_ids:
            self.get(node_id)

    def is_ancestor_or_self(self, candidate_id: str, target_id: str) -> bool:
        """Return True if candidate is target or one of its ancestors.

        Raises:
            UnknownPolicyNode: If either id is not in this tree.
        """
        return self.get(candidate_id).contains(self.get(target_id))

    def is_ancestor_or_self_of_any(self, candidate_id: str, target_ids: Iterable[str]) -> bool:
        """Return True if candidate contains at least one of target_ids."""
        candidate = self.get(candidate_id)
        return any(candidate.contains(self.get(target_id)) for target_id in target_ids)

    def contains_any(self, candidate_ids: Iterable[str], target_id: str) -> bool:
        """Return True if at least one candidate contains target.

        This is the check a preference list performs against one required id.
        """
        target = self.get(target_id)
        return any(self.get(candidate_id).contains(target) for candidate_id in candidate_ids)

    def parent(self, node_id: str) -> PolicyNode | None:
        """Get the parent node, or None for a root."""
        node = self.get(node_id)
        return self._by_id[node.parent_id] if node.parent_id is not None else None

    def ancestors(self, node_id: str) -> list[PolicyNode]:
        """Proper ancestors, outermost first."""
        target = self.get(node_id)
        return [node for node in self._ordered if node.id != target.id and node.contains(target)]

    def descendants(self, node_id: str) -> list[PolicyNode]:
        """Proper descendants in pre-order."""
        node = self.get(node_id)
        start = bisect_right(self._lefts, node.left)
        end = bisect_left(self._lefts, node.right)
        return list(self._ordered[start:end])


def _validate_intervals(nodes: list[PolicyNode], kind: str) -> list[PolicyNode]:
    """Check nested-set consistency and derive parent ids.

    Rules:
    - ids are unique
    - left < right for every node, all 2n endpoints distinct
    - the smallest left is 1
    - two intervals are either disjoint or one contains the other
    - an explicit parent_id must match the one implied by containment

    Returns:
        Nodes sorted by ``left`` with ``parent_id`` filled in.

    Raises:
        MalformedTaxonomy: If any rule is violated.
    """
    if not nodes:
        return []

    seen_ids: set[str] = set()
    endpoints: set[int] = set()
    for node in nodes:
        if node.id in seen_ids:
            raise MalformedTaxonomy(f"Duplicate {kind} id: {node.id!r}")
        seen_ids.add(node.id)
        if node.left >= node.right:
            raise MalformedTaxonomy(
                f"{kind.capitalize()} {node.id!r} has left={node.left} >= right={node.right}"
            )
        if node.left in endpoints or node.right in endpoints:
            raise MalformedTaxonomy(f"{kind.capitalize()} {node.id!r} shares an interval endpoint with another node")
        endpoints.update((node.left, node.right))

    ordered = sorted(nodes, key=lambda n: n.left)
    if ordered[0].left != 1:
        raise MalformedTaxonomy(f"{kind.capitalize()} taxonomy must start at left=1, got {ordered[0].left}")

    result: list[PolicyNode] = []
    open_nodes: list[PolicyNode] = []
    for node in ordered:
        while open_nodes and open_nodes[-1].right < node.left:
            open_nodes.pop()

        derived_parent: str | None = None
        if open_nodes:
            enclosing = open_nodes[-1]
            if enclosing.right < node.right:
                raise MalformedTaxonomy(
                    f"{kind.capitalize()} intervals overlap without containment: "
                    f"{enclosing.id!r} ({enclosing.left}, {enclosing.right}) and "
                    f"{node.id!r} ({node.left}, {node.right})"
                )
            derived_parent = enclosing.id

        if node.parent_id is not None and node.parent_id != derived_parent:
            raise MalformedTaxonomy(
                f"{kind.capitalize()} {node.id!r} declares parent {node.parent_id!r} "
                f"but its interval places it under {derived_parent!r}"
            )

        numbered = node if node.parent_id == derived_parent else node.model_copy(update={"parent_id": derived_parent})
        result.append(numbered)
        open_nodes.append(numbered)

    return result
