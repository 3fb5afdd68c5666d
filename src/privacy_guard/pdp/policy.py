"""Policy and record models for compliance evaluation.

This module defines the policy taxonomy schema and the two records a
decision is made on.

Policy structure:
    PrivacyPolicy
    ├── version: Schema version for migrations
    ├── attributes: List[TaxonomyEntry]   (what data an app touches)
    └── purposes: List[TaxonomyEntry]     (why the app touches it)
        └── TaxonomyEntry
            ├── id, name
            ├── parent: id of the parent entry (tree given as links), or
            └── left/right: pre-computed nested-set interval

Records:
    AppRecord               - what an app requires
    UserPrivacyPreference   - what a user allows, excepts and denies
    UserRecord              - user plus current preference (record store)

All models are frozen. Id collections are frozensets: order carries no
meaning and two logically identical records compare equal.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxonomyEntry(BaseModel):
    """One node as supplied by the policy source.

    Either ``parent`` links (intervals are computed) or both ``left`` and
    ``right`` (intervals are validated) describe the tree shape.

    Attributes:
        id: Unique id within the taxonomy.
        name: Human-readable name (e.g., "Location").
        parent: Parent entry id, None for a root.
        left: Pre-computed interval start.
        right: Pre-computed interval end.
    """

    id: str = Field(min_length=1)
    name: str
    parent: str | None = None
    left: int | None = None
    right: int | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def interval_complete(self) -> Self:
        """Validate that left and right are given together."""
        if (self.left is None) != (self.right is None):
            raise ValueError(f"Entry {self.id!r}: 'left' and 'right' must be given together")
        return self

    @property
    def has_interval(self) -> bool:
        return self.left is not None


class PrivacyPolicy(BaseModel):
    """Complete policy: the attribute and purpose taxonomies.

    Attributes:
        version: Schema version for migrations.
        attributes: Attribute taxonomy entries.
        purposes: Purpose taxonomy entries.
    """

    version: str = "1"
    attributes: list[TaxonomyEntry] = Field(default_factory=list)
    purposes: list[TaxonomyEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class AppRecord(BaseModel):
    """An application's declared data practices.

    A new version of an app is a new record.

    Attributes:
        id: App identifier.
        name: Display name.
        attributes: Attribute node ids the app requires.
        purposes: Purpose node ids the app processes data for.
        retention_seconds: How long the app keeps the data.
    """

    id: str
    name: str | None = None
    attributes: frozenset[str] = frozenset()
    purposes: frozenset[str] = frozenset()
    retention_seconds: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class UserPrivacyPreference(BaseModel):
    """A user's privacy preference.

    Allowing a node allows its whole subtree. Excepted and denied nodes
    override allowed ones at any level; the two lists behave identically.

    Attributes:
        user_id: Owning user.
        allowed_attributes: Attribute subtrees the user allows.
        excepted_attributes: Attribute subtrees carved out of allowed ones.
        denied_attributes: Attribute subtrees the user denies.
        allowed_purposes: Purpose subtrees the user allows.
        excepted_purposes: Purpose subtrees carved out of allowed ones.
        denied_purposes: Purpose subtrees the user denies.
        retention_seconds: Longest retention the user accepts.
    """

    user_id: str
    allowed_attributes: frozenset[str] = frozenset()
    excepted_attributes: frozenset[str] = frozenset()
    denied_attributes: frozenset[str] = frozenset()
    allowed_purposes: frozenset[str] = frozenset()
    excepted_purposes: frozenset[str] = frozenset()
    denied_purposes: frozenset[str] = frozenset()
    retention_seconds: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def attribute_ids(self) -> frozenset[str]:
        """All attribute ids referenced by this preference."""
        return self.allowed_attributes | self.excepted_attributes | self.denied_attributes

    def purpose_ids(self) -> frozenset[str]:
        """All purpose ids referenced by this preference."""
        return self.allowed_purposes | self.excepted_purposes | self.denied_purposes


class UserRecord(BaseModel):
    """A user together with the current privacy preference.

    Attributes:
        id: User identifier (equals preference.user_id).
        full_name: Display name.
        preference: Current privacy preference.
    """

    id: str
    full_name: str | None = None
    preference: UserPrivacyPreference

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def preference_owned_by_user(self) -> Self:
        """Validate that the preference belongs to this user."""
        if self.preference.user_id != self.id:
            raise ValueError(
                f"Preference belongs to {self.preference.user_id!r}, not to user {self.id!r}"
            )
        return self


def _entry(node_id: str, name: str, parent: str | None = None) -> TaxonomyEntry:
    return TaxonomyEntry(id=node_id, name=name, parent=parent)


def create_default_policy() -> PrivacyPolicy:
    """Create the default policy written by ``privacy-guard init``.

    Returns:
        PrivacyPolicy with a small attribute and purpose taxonomy given as
        parent links.
    """
    return PrivacyPolicy(
        version="1",
        attributes=[
            _entry("identifier", "Identifier"),
            _entry("user-id", "User ID", "identifier"),
            _entry("name", "Name", "identifier"),
            _entry("location", "Location"),
            _entry("gps", "GPS", "location"),
            _entry("ip-address", "IP Address", "location"),
            _entry("contact", "Contact"),
            _entry("email", "Email", "contact"),
            _entry("phone", "Phone", "contact"),
            _entry("health", "Health"),
            _entry("heart-rate", "Heart rate", "health"),
            _entry("blood-pressure", "Blood pressure", "health"),
            _entry("fitness", "Fitness", "health"),
            _entry("movement", "Movement", "fitness"),
            _entry("height", "Height", "fitness"),
        ],
        purposes=[
            _entry("admin", "Admin"),
            _entry("security", "Security", "admin"),
            _entry("analytics", "Analytics"),
            _entry("marketing", "Marketing"),
            _entry("advertising", "Advertising", "marketing"),
            _entry("profiling", "Profiling", "marketing"),
            _entry("research", "Research"),
        ],
    )
