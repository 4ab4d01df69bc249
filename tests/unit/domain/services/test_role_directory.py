"""Unit tests for role ordering and descriptions."""

from itertools import permutations

import pytest

from ledgerly.domain.entities.role import RoleSummary, describe_role, is_system_role
from ledgerly.domain.services import default_level, sort_roles
from ledgerly.domain.entities.access_level import AccessLevel


@pytest.mark.parametrize("names", list(permutations(["Manager", "User", "Admin", "Auditor"])))
def test_sort_roles_any_input_order(names):
    assert sort_roles(names) == ["Admin", "User", "Auditor", "Manager"]


def test_sort_roles_is_case_insensitive_and_deduplicated():
    assert sort_roles(["zeta", "Alpha", "beta", "Alpha", "User"]) == ["User", "Alpha", "beta", "zeta"]


def test_system_roles():
    assert is_system_role("Admin") is True
    assert is_system_role("User") is True
    assert is_system_role("Manager") is False


def test_descriptions():
    assert describe_role("Admin") == "Full system access with all permissions"
    assert describe_role("User") == "Standard user with basic permissions"
    assert describe_role("Manager") == "Custom role: Manager"


def test_summary_defaults_description():
    summary = RoleSummary(name="Manager", is_system=False, user_count=0, permission_count=9)
    assert summary.description == "Custom role: Manager"


@pytest.mark.parametrize(
    ("role", "feature", "expected"),
    [
        ("Admin", "Admin Panel", AccessLevel.EDIT),
        ("Admin", "Invoices", AccessLevel.EDIT),
        ("User", "Invoices", AccessLevel.VIEW),
        ("User", "Admin Panel", AccessLevel.NONE),
        ("Manager", "Invoices", AccessLevel.NONE),
    ],
)
def test_default_levels(role, feature, expected):
    assert default_level(role, feature) == expected
