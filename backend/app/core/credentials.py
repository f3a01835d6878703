"""Credentials — salted PBKDF2 password hashing and verification via passlib.

Invariants:
    - Every call to hash_password draws a fresh 16-byte salt
    - KDF parameters are fixed module constants; verify uses the same ones
    - verify_password never raises on bad input — it returns False

Design Decisions:
    - passlib's pbkdf2_sha512 handler (10k rounds, 512-bit checksum) does the
      salting, derivation and constant-time comparison
    - The user row keeps salt and hash in separate columns, so the modular
      crypt string is split on store and reassembled on verify
"""

from dataclasses import dataclass

from passlib.context import CryptContext

SALT_BYTES = 16
PBKDF2_ITERATIONS = 10_000
PBKDF2_SCHEME = "pbkdf2_sha512"
HASH_BYTES = 64

_IDENT = "pbkdf2-sha512"

pwd_context = CryptContext(
    schemes=[PBKDF2_SCHEME],
    pbkdf2_sha512__default_rounds=PBKDF2_ITERATIONS,
    pbkdf2_sha512__salt_size=SALT_BYTES,
)


@dataclass(frozen=True)
class PasswordDigest:
    """Adapted-base64 salt and checksum, as persisted on the user row."""
    salt: str
    hash: str


def _assemble(salt: str, password_hash: str) -> str:
    return f"${_IDENT}${PBKDF2_ITERATIONS}${salt}${password_hash}"


def hash_password(plaintext: str) -> PasswordDigest:
    """Generate a new salt and derive the password hash."""
    # "$pbkdf2-sha512$<rounds>$<salt>$<checksum>"
    _, _, _, salt, checksum = pwd_context.hash(plaintext).split("$")
    return PasswordDigest(salt=salt, hash=checksum)


def verify_password(
    plaintext: str, salt: str | None, password_hash: str | None,
) -> bool:
    """True iff plaintext derives to the stored hash under the stored salt."""
    if not salt or not password_hash or plaintext is None:
        return False
    try:
        return pwd_context.verify(plaintext, _assemble(salt, password_hash))
    except (ValueError, TypeError):
        return False
