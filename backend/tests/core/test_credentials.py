"""Tests for core.credentials — salted PBKDF2 hashing and verification, no IO."""

from passlib.utils.binary import ab64_decode

from app.core.credentials import (
    HASH_BYTES, PBKDF2_ITERATIONS, SALT_BYTES, hash_password, pwd_context,
    verify_password,
)


def test_round_trip_verifies_same_password():
    digest = hash_password("secret123")
    assert verify_password("secret123", digest.salt, digest.hash)


def test_different_password_is_rejected():
    digest = hash_password("secret123")
    assert not verify_password("secret124", digest.salt, digest.hash)
    assert not verify_password("", digest.salt, digest.hash)
    assert not verify_password("SECRET123", digest.salt, digest.hash)


def test_salt_and_hash_sizes():
    digest = hash_password("pw")
    assert len(ab64_decode(digest.salt)) == SALT_BYTES
    assert len(ab64_decode(digest.hash)) == HASH_BYTES
    assert HASH_BYTES * 8 >= 512


def test_each_hash_uses_a_fresh_salt():
    a = hash_password("same")
    b = hash_password("same")
    assert a.salt != b.salt
    assert a.hash != b.hash


def test_missing_salt_returns_false_without_raising():
    digest = hash_password("pw")
    assert verify_password("pw", None, digest.hash) is False
    assert verify_password("pw", "", digest.hash) is False
    assert verify_password("pw", digest.salt, None) is False


def test_hash_from_other_salt_does_not_verify():
    a = hash_password("pw")
    b = hash_password("pw")
    assert not verify_password("pw", a.salt, b.hash)


def test_unicode_passwords_round_trip():
    digest = hash_password("pässwörd-密码")
    assert verify_password("pässwörd-密码", digest.salt, digest.hash)


def test_context_uses_ten_thousand_rounds():
    stored = pwd_context.hash("pw")
    assert stored.startswith(f"$pbkdf2-sha512${PBKDF2_ITERATIONS}$")
    assert not pwd_context.needs_update(stored)


def test_corrupted_salt_returns_false_without_raising():
    digest = hash_password("pw")
    assert verify_password("pw", "not$valid", digest.hash) is False
    assert verify_password("pw", digest.salt, "!!") is False
