"""Unit tests for access levels and permission entities."""

import pytest

from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import (
    ADMIN_PANEL,
    DEFAULT_SAFE_PATH,
    FEATURES,
    feature_by_name,
    feature_by_path,
)
from ledgerly.domain.entities.permission import (
    DENIED,
    FULL_ACCESS,
    AccessDecision,
    PermissionEntry,
    PermissionSnapshot,
)


class TestAccessLevel:
    """Test suite for AccessLevel."""

    def test_total_order(self):
        assert AccessLevel.NONE < AccessLevel.VIEW < AccessLevel.EDIT
        assert max(AccessLevel) == AccessLevel.EDIT

    @pytest.mark.parametrize(
        ("granted", "required", "expected"),
        [
            (AccessLevel.EDIT, AccessLevel.VIEW, True),
            (AccessLevel.VIEW, AccessLevel.VIEW, True),
            (AccessLevel.VIEW, AccessLevel.EDIT, False),
            (AccessLevel.NONE, AccessLevel.VIEW, False),
            (AccessLevel.NONE, AccessLevel.NONE, True),
        ],
    )
    def test_satisfies(self, granted, required, expected):
        assert granted.satisfies(required) is expected

    @pytest.mark.parametrize("literal", ["view", "VIEW", " View "])
    def test_parse_is_lenient_about_case_and_whitespace(self, literal):
        assert AccessLevel.parse(literal) == AccessLevel.VIEW

    @pytest.mark.parametrize("literal", ["admin", "", None, 2])
    def test_parse_rejects_unknown(self, literal):
        with pytest.raises(ValueError):
            AccessLevel.parse(literal)


class TestAccessDecision:
    def test_for_level(self):
        decision = AccessDecision.for_level(AccessLevel.VIEW)

        assert decision.has_access is True
        assert decision.can_view is True
        assert decision.can_edit is False

    def test_constants(self):
        assert DENIED.has_access is False
        assert FULL_ACCESS.can_edit is True


class TestPermissionEntry:
    def test_requires_role(self):
        with pytest.raises(ValueError):
            PermissionEntry("", "Invoices", "/dashboard/invoices", AccessLevel.VIEW)

    def test_snapshot_from_entries(self):
        snapshot = PermissionSnapshot.from_entries(
            [
                PermissionEntry("User", "Invoices", "/dashboard/invoices", AccessLevel.VIEW),
                PermissionEntry("User", "Reports", "/dashboard/reports", AccessLevel.EDIT),
            ]
        )

        assert len(snapshot) == 2
        assert snapshot["/dashboard/reports"] == AccessLevel.EDIT
        assert snapshot.get("/dashboard/vendors") is None


class TestFeatures:
    def test_nine_features_in_canonical_order(self):
        assert [feature.name for feature in FEATURES] == [
            "Dashboard",
            "Customers",
            "Products",
            "Invoices",
            "Expenses",
            "Vendors",
            "Transactions",
            "Reports",
            "Admin Panel",
        ]

    def test_lookups(self):
        assert feature_by_name("Admin Panel") is ADMIN_PANEL
        assert feature_by_path("/dashboard/admin") is ADMIN_PANEL
        assert feature_by_name("Payroll") is None

    def test_safe_path(self):
        assert DEFAULT_SAFE_PATH == "/dashboard"
