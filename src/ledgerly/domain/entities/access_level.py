"""Access level enumeration.

Access levels are totally ordered: none < view < edit. Checking whether a
granted level satisfies a requirement is a single comparison.
"""

from enum import Enum


class AccessLevel(str, Enum):
    """Access granted to a role on a single feature."""

    NONE = "none"
    VIEW = "view"
    EDIT = "edit"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def satisfies(self, required: "AccessLevel") -> bool:
        """Return True if this level is at least the required level."""
        return self.rank >= required.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: "str | AccessLevel") -> "AccessLevel":
        """Parse a stored or submitted access level literal.

        Args:
            value: 'none', 'view', 'edit' (case-insensitive) or an AccessLevel.

        Returns:
            The matching AccessLevel.

        Raises:
            ValueError: If the literal is not a known level.
        """
        if isinstance(value, AccessLevel):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid access level: {value!r}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid access level: {value!r}") from None


_RANK = {AccessLevel.NONE: 0, AccessLevel.VIEW: 1, AccessLevel.EDIT: 2}
