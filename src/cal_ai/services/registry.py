"""Multi-user registry and session with write-through persistence."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from cal_ai.domain.models import UserData
from cal_ai.domain.profile import ProfileData, UserProfile
from cal_ai.services.reducers import new_user_data

USERS_DATA_KEY = "cal-ai-users-data"
CURRENT_USER_KEY = "cal-ai-current-user-id"

_logger = logging.getLogger(__name__)

_USERS_ADAPTER: TypeAdapter[dict[str, UserData]] = TypeAdapter(dict[str, UserData])

UserUpdater = Callable[[UserData], UserData]
CurrentUserListener = Callable[[UserData | None], None]


class KeyValueStorage(Protocol):
    """Durable storage for JSON-serializable values."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a value under a key, replacing any previous value."""


@dataclass
class UserRegistry:
    """Maps user ids to their data and tracks the active user.

    Updates replace the whole mapping, so readers see either the previous or
    the updated aggregate. Each change is written to storage immediately; a
    failed write is logged and the in-memory state is kept.
    """

    storage: KeyValueStorage
    users_key: str = USERS_DATA_KEY
    current_user_key: str = CURRENT_USER_KEY
    _users: dict[str, UserData] = field(init=False, default_factory=dict)
    _current_user_id: str | None = field(init=False, default=None)
    _listeners: list[CurrentUserListener] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._users = self._load_users()
        self._current_user_id = self._load_current_user_id()

    @property
    def current_user_id(self) -> str | None:
        return self._current_user_id

    def users(self) -> list[UserProfile]:
        """Return the profiles of all registered users."""
        return [user.profile for user in self._users.values()]

    def get(self, user_id: str) -> UserData | None:
        return self._users.get(user_id)

    def current_user(self) -> UserData | None:
        if self._current_user_id is None:
            return None
        return self._users.get(self._current_user_id)

    def subscribe(self, listener: CurrentUserListener) -> None:
        """Call ``listener`` with the current user after every change."""
        self._listeners.append(listener)

    def register(
        self, profile_data: ProfileData, current_weight: float, today: date
    ) -> UserData:
        """Create a user with seeded defaults and make it current."""
        user_id = str(uuid4())
        user = new_user_data(profile_data, user_id, current_weight, today)
        self._users = {**self._users, user_id: user}
        self._write_users()
        self._set_current(user_id)
        _logger.info("Registered user %s", user_id)
        return user

    def login(self, user_id: str) -> bool:
        """Switch to an existing user. Unknown ids are ignored."""
        if user_id not in self._users:
            return False
        self._set_current(user_id)
        return True

    def logout(self) -> None:
        self._set_current(None)

    def delete_user(self, user_id: str) -> bool:
        """Remove a user and all of their data."""
        if user_id not in self._users:
            return False
        self._users = {
            key: value for key, value in self._users.items() if key != user_id
        }
        self._write_users()
        if self._current_user_id == user_id:
            self._set_current(None)
        else:
            self._notify()
        _logger.info("Deleted user %s", user_id)
        return True

    def delete_current_user(self) -> bool:
        if self._current_user_id is None:
            return False
        return self.delete_user(self._current_user_id)

    def update(self, user_id: str, updater: UserUpdater) -> UserData | None:
        """Apply ``updater`` to a user's snapshot and persist the result.

        Returns the new snapshot, or None when the user does not exist.
        """
        current = self._users.get(user_id)
        if current is None:
            _logger.debug("Dropping update for unknown user %s", user_id)
            return None
        updated = updater(current)
        self._users = {**self._users, user_id: updated}
        self._write_users()
        if user_id == self._current_user_id:
            self._notify()
        return updated

    def update_current(self, updater: UserUpdater) -> UserData | None:
        if self._current_user_id is None:
            _logger.debug("Dropping update with no active user")
            return None
        return self.update(self._current_user_id, updater)

    def flush(self) -> None:
        """Write the full registry and session to storage."""
        self._write_users()
        self._write(self.current_user_key, self._current_user_id)

    def _set_current(self, user_id: str | None) -> None:
        self._current_user_id = user_id
        self._write(self.current_user_key, user_id)
        self._notify()

    def _notify(self) -> None:
        current = self.current_user()
        for listener in self._listeners:
            listener(current)

    def _write_users(self) -> None:
        try:
            payload = _USERS_ADAPTER.dump_python(self._users, mode="json")
            self.storage.set(self.users_key, payload)
        except Exception:
            _logger.exception("Failed to persist %s", self.users_key)

    def _write(self, key: str, value: object) -> None:
        try:
            self.storage.set(key, value)
        except Exception:
            _logger.exception("Failed to persist %s", key)

    def _load_users(self) -> dict[str, UserData]:
        try:
            raw = self.storage.get(self.users_key)
        except Exception:
            _logger.exception("Failed to read %s", self.users_key)
            return {}
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            _logger.error("Ignoring unreadable %s", self.users_key)
            return {}
        users: dict[str, UserData] = {}
        for user_id, payload in raw.items():
            try:
                users[str(user_id)] = UserData.model_validate(payload)
            except ValidationError:
                _logger.exception(
                    "Ignoring unreadable user %s in %s", user_id, self.users_key
                )
        return users

    def _load_current_user_id(self) -> str | None:
        try:
            raw = self.storage.get(self.current_user_key)
        except Exception:
            _logger.exception("Failed to read %s", self.current_user_key)
            return None
        if isinstance(raw, str) and raw in self._users:
            return raw
        return None
