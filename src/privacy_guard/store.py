"""In-memory app and user records.

Records are immutable pydantic models; updating a preference replaces the
whole UserRecord. Ids are generated as uuid4 hex strings unless a record is
added with its own id.
"""

from __future__ import annotations

__all__ = [
    "RecordStore",
]

import threading
import uuid
from collections.abc import Iterable
from typing import Any

from privacy_guard.exceptions import RecordNotFound
from privacy_guard.pdp.policy import AppRecord, UserPrivacyPreference, UserRecord


class RecordStore:
    """Thread-safe in-memory store for apps and users.

    Listing returns records in insertion order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._apps: dict[str, AppRecord] = {}
        self._users: dict[str, UserRecord] = {}

    # -------------------------------------------------------------------------
    # Apps
    # -------------------------------------------------------------------------

    def create_app(
        self,
        *,
        name: str | None,
        attributes: Iterable[str],
        purposes: Iterable[str],
        retention_seconds: int,
    ) -> AppRecord:
        """Create an app with a generated id."""
        app = AppRecord(
            id=uuid.uuid4().hex,
            name=name,
            attributes=frozenset(attributes),
            purposes=frozenset(purposes),
            retention_seconds=retention_seconds,
        )
        return self.add_app(app)

    def add_app(self, app: AppRecord) -> AppRecord:
        """Insert an app with its own id.

        Raises:
            ValueError: If the id is already taken.
        """
        with self._lock:
            if app.id in self._apps:
                raise ValueError(f"App already exists: {app.id}")
            self._apps[app.id] = app
        return app

    def get_app(self, app_id: str) -> AppRecord:
        """Raises RecordNotFound if the app does not exist."""
        with self._lock:
            try:
                return self._apps[app_id]
            except KeyError:
                raise RecordNotFound("app", app_id) from None

    def list_apps(self, limit: int, skip: int = 0) -> list[AppRecord]:
        with self._lock:
            return list(self._apps.values())[skip : skip + limit]

    def count_apps(self) -> int:
        with self._lock:
            return len(self._apps)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def create_user(self, *, full_name: str | None, preference: dict[str, Any]) -> UserRecord:
        """Create a user with a generated id.

        Args:
            full_name: Display name.
            preference: UserPrivacyPreference fields without user_id.

        Raises:
            pydantic.ValidationError: If the preference fields are invalid.
        """
        user_id = uuid.uuid4().hex
        fields = {**preference, "user_id": user_id}
        user = UserRecord(
            id=user_id,
            full_name=full_name,
            preference=UserPrivacyPreference.model_validate(fields),
        )
        return self.add_user(user)

    def add_user(self, user: UserRecord) -> UserRecord:
        """Insert a user with its own id.

        Raises:
            ValueError: If the id is already taken.
        """
        with self._lock:
            if user.id in self._users:
                raise ValueError(f"User already exists: {user.id}")
            self._users[user.id] = user
        return user

    def get_user(self, user_id: str) -> UserRecord:
        """Raises RecordNotFound if the user does not exist."""
        with self._lock:
            try:
                return self._users[user_id]
            except KeyError:
                raise RecordNotFound("user", user_id) from None

    def list_users(self, limit: int, skip: int = 0) -> list[UserRecord]:
        with self._lock:
            return list(self._users.values())[skip : skip + limit]

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    def update_preference(self, user_id: str, preference: UserPrivacyPreference) -> UserRecord:
        """Replace a user's preference.

        Does not touch the decision cache; callers go through
        PrivacyGuardService.update_preference for that.

        Raises:
            RecordNotFound: If the user does not exist.
            ValueError: If the preference belongs to another user.
        """
        if preference.user_id != user_id:
            raise ValueError(f"Preference belongs to {preference.user_id!r}, not to user {user_id!r}")

        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                raise RecordNotFound("user", user_id)
            updated = current.model_copy(update={"preference": preference})
            self._users[user_id] = updated
        return updated
