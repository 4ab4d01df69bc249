"""Admin console permission editor.

Holds the working copy of one role's access levels while an administrator
edits them. Any local change marks the editor dirty; leaving the editor
while dirty (switching role or tab) yields a pending prompt that must be
resolved with 'discard' or 'stay' before navigation happens.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import FEATURES, feature_by_name
from ledgerly.domain.entities.permission import PermissionEntry


class NavigationChoice(str, Enum):
    DISCARD = "discard"
    STAY = "stay"


@dataclass(frozen=True)
class PendingNavigation:
    """A navigation held back because there are unsaved changes."""

    target: str
    message: str = "You have unsaved changes. Discard them and continue?"


class PermissionEditor:
    """Working copy of a role's permissions with unsaved-change tracking."""

    def __init__(self, role: str, entries: list[PermissionEntry] | None = None) -> None:
        self.role = role
        self._saved: dict[str, AccessLevel] = {}
        self._working: dict[str, AccessLevel] = {}
        self._pending: PendingNavigation | None = None
        self.load(role, entries or [])

    def load(self, role: str, entries: list[PermissionEntry]) -> None:
        """Replace the working copy with freshly fetched entries."""
        self.role = role
        self._saved = {feature.name: AccessLevel.NONE for feature in FEATURES}
        for entry in entries:
            if feature_by_name(entry.feature) is not None:
                self._saved[entry.feature] = entry.access_level
        self._working = dict(self._saved)
        self._pending = None

    @property
    def is_dirty(self) -> bool:
        return self._working != self._saved

    @property
    def pending(self) -> PendingNavigation | None:
        return self._pending

    def level(self, feature_name: str) -> AccessLevel:
        return self._working[feature_name]

    def set_level(self, feature_name: str, level: AccessLevel | str) -> None:
        """Change one feature's level locally.

        Raises:
            KeyError: If the feature is unknown.
            ValueError: If the level is unknown.
        """
        if feature_name not in self._working:
            raise KeyError(feature_name)
        self._working[feature_name] = AccessLevel.parse(level)

    def request_navigation(self, target: str) -> PendingNavigation | None:
        """Ask to leave the editor.

        Returns:
            None when navigation may proceed immediately, otherwise the
            pending prompt that must be resolved first.
        """
        if not self.is_dirty:
            self._pending = None
            return None
        self._pending = PendingNavigation(target=target)
        return self._pending

    def resolve(self, choice: NavigationChoice | str) -> str | None:
        """Answer the pending prompt.

        Returns:
            The navigation target on 'discard' (local changes are dropped),
            or None on 'stay' (changes are kept).

        Raises:
            RuntimeError: If there is no pending prompt.
        """
        if self._pending is None:
            raise RuntimeError("No navigation is pending")

        choice = NavigationChoice(choice)
        pending, self._pending = self._pending, None
        if choice is NavigationChoice.STAY:
            return None

        self._working = dict(self._saved)
        return pending.target

    def build_payload(self) -> list[dict[str, Any]]:
        """Batch-update payload covering all nine features."""
        return [
            {
                "feature_name": feature.name,
                "feature_path": feature.path,
                "access_level": self._working[feature.name].value,
            }
            for feature in FEATURES
        ]

    def mark_saved(self) -> None:
        """Record that the working copy has been persisted."""
        self._saved = dict(self._working)
        self._pending = None
