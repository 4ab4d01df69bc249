"""Unit tests for password hashing utilities."""

from ledgerly.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2_hash(self):
        hashed = hash_password("Ledger!2024")

        assert hashed.startswith("$argon2id$")
        assert hashed != "Ledger!2024"

    def test_hash_password_different_for_same_input(self):
        """Hashing the same password twice produces different hashes (salt)."""
        assert hash_password("Ledger!2024") != hash_password("Ledger!2024")


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        hashed = hash_password("Ledger!2024")
        assert verify_password("Ledger!2024", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("Ledger!2024")
        assert verify_password("ledger!2024", hashed) is False

    def test_verify_password_invalid_hash(self):
        """A stored value that is not an Argon2 hash never verifies."""
        assert verify_password("Ledger!2024", "plaintext") is False


def test_fresh_hash_needs_no_rehash():
    assert needs_rehash(hash_password("Ledger!2024")) is False
