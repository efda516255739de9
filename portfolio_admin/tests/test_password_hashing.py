from __future__ import annotations

from portfolio_admin.infrastructure.auth.password_hashing import WerkzeugPasswordHasher


def test_default_method_is_scrypt() -> None:
    hashed = WerkzeugPasswordHasher().hash("admin123")

    assert hashed.startswith("scrypt:")
    assert "admin123" not in hashed


def test_hashes_are_salted_and_verify() -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")

    first, second = hasher.hash("secret1"), hasher.hash("secret1")

    assert first != second
    assert hasher.verify("secret1", first) is True
    assert hasher.verify("secret2", first) is False


def test_unreadable_hash_never_verifies() -> None:
    hasher = WerkzeugPasswordHasher()

    assert hasher.verify("secret1", "") is False
    assert hasher.verify("secret1", "plaintext") is False
