"""Tests for Argon2id password hashing."""

from cloudauth.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)


def test_hash_password_uses_argon2id():
    hashed = hash_password("Sup3r-secret")

    assert hashed.startswith("$argon2id$")
    assert "Sup3r-secret" not in hashed


def test_hash_password_is_salted():
    assert hash_password("Sup3r-secret") != hash_password("Sup3r-secret")


def test_verify_password(password_hash):
    assert verify_password("Sup3r-secret", password_hash) is True
    assert verify_password("wrong-password", password_hash) is False


def test_verify_password_malformed_hash():
    assert verify_password("Sup3r-secret", "not-a-hash") is False


def test_dummy_hash_is_a_valid_hash():
    assert DUMMY_PASSWORD_HASH.startswith("$argon2id$")
    assert verify_password("anything", DUMMY_PASSWORD_HASH) is False
