"""Policy API schemas."""

from __future__ import annotations

__all__ = [
    "PolicyNodeResponse",
    "PolicyResponse",
]

from pydantic import BaseModel

from privacy_guard.pdp.taxonomy import PolicyNode, PolicyTree


class PolicyNodeResponse(BaseModel):
    """One taxonomy node with its computed interval."""

    id: str
    name: str
    left: int
    right: int
    parent_id: str | None

    @classmethod
    def from_node(cls, node: PolicyNode) -> "PolicyNodeResponse":
        return cls(
            id=node.id,
            name=node.name,
            left=node.left,
            right=node.right,
            parent_id=node.parent_id,
        )


def nodes_of(tree: PolicyTree) -> list[PolicyNodeResponse]:
    """Tree nodes in pre-order (ascending left)."""
    return [PolicyNodeResponse.from_node(node) for node in tree]


class PolicyResponse(BaseModel):
    """Both taxonomies as loaded by the running service."""

    policy_version: str | None
    attributes_count: int
    purposes_count: int
    attributes: list[PolicyNodeResponse]
    purposes: list[PolicyNodeResponse]
