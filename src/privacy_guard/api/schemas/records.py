"""App and user API schemas.

Id lists are returned sorted so responses are stable.
"""

from __future__ import annotations

__all__ = [
    "AppCreate",
    "AppListResponse",
    "AppResponse",
    "PreferenceBody",
    "UserCreate",
    "UserListResponse",
    "UserResponse",
]

from pydantic import BaseModel, Field

from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference, UserRecord


class PreferenceBody(BaseModel):
    """A privacy preference as sent by clients (owner implied by the URL)."""

    allowed_attributes: list[str] = Field(default_factory=list)
    excepted_attributes: list[str] = Field(default_factory=list)
    denied_attributes: list[str] = Field(default_factory=list)
    allowed_purposes: list[str] = Field(default_factory=list)
    excepted_purposes: list[str] = Field(default_factory=list)
    denied_purposes: list[str] = Field(default_factory=list)
    retention_seconds: int = Field(ge=0)

    def to_preference(self, user_id: str) -> UserPrivacyPreference:
        return UserPrivacyPreference.model_validate({**self.model_dump(), "user_id": user_id})

    @classmethod
    def from_preference(cls, preference: UserPrivacyPreference) -> "PreferenceBody":
        return cls(
            allowed_attributes=sorted(preference.allowed_attributes),
            excepted_attributes=sorted(preference.excepted_attributes),
            denied_attributes=sorted(preference.denied_attributes),
            allowed_purposes=sorted(preference.allowed_purposes),
            excepted_purposes=sorted(preference.excepted_purposes),
            denied_purposes=sorted(preference.denied_purposes),
            retention_seconds=preference.retention_seconds,
        )


class UserCreate(BaseModel):
    """Request body for POST /api/users."""

    full_name: str | None = None
    privacy_preference: PreferenceBody


class UserResponse(BaseModel):
    id: str
    full_name: str | None
    privacy_preference: PreferenceBody

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id,
            full_name=user.full_name,
            privacy_preference=PreferenceBody.from_preference(user.preference),
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int
    limit: int
    skip: int


class AppCreate(BaseModel):
    """Request body for POST /api/apps."""

    name: str | None = None
    attributes: list[str] = Field(default_factory=list)
    purposes: list[str] = Field(default_factory=list)
    retention_seconds: int = Field(ge=0)


class AppResponse(BaseModel):
    id: str
    name: str | None
    attributes: list[str]
    purposes: list[str]
    retention_seconds: int

    @classmethod
    def from_record(cls, app: AppRecord) -> "AppResponse":
        return cls(
            id=app.id,
            name=app.name,
            attributes=sorted(app.attributes),
            purposes=sorted(app.purposes),
            retention_seconds=app.retention_seconds,
        )


class AppListResponse(BaseModel):
    apps: list[AppResponse]
    total: int
    limit: int
    skip: int
