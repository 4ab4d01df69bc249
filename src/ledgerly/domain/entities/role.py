"""Role entities.

Roles are not stored as rows of their own: a role exists while at least one
permission entry names it. 'Admin' and 'User' are system roles.
"""

from dataclasses import dataclass

ADMIN_ROLE = "Admin"
USER_ROLE = "User"
SYSTEM_ROLES = frozenset({ADMIN_ROLE, USER_ROLE})


def is_system_role(name: str) -> bool:
    """Return True for roles that can be neither renamed nor deleted."""
    return name in SYSTEM_ROLES


def describe_role(name: str) -> str:
    """Human-readable description shown in the admin console."""
    if name == ADMIN_ROLE:
        return "Full system access with all permissions"
    if name == USER_ROLE:
        return "Standard user with basic permissions"
    return f"Custom role: {name}"


def role_sort_key(name: str) -> tuple[int, str, str]:
    """Sort key placing Admin first, User second, then the rest alphabetically."""
    if name == ADMIN_ROLE:
        return (0, "", name)
    if name == USER_ROLE:
        return (1, "", name)
    return (2, name.casefold(), name)


@dataclass
class RoleSummary:
    """Role as listed in the role directory.

    Attributes:
        name: Role name.
        is_system: Whether the role is protected from rename and deletion.
        user_count: Number of users whose role field equals this name.
        permission_count: Number of features the role is provisioned for.
        description: Display description.
    """

    name: str
    is_system: bool
    user_count: int
    permission_count: int
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Role name is required")
        if not self.description:
            self.description = describe_role(self.name)
