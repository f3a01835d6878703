"""Identity Rules — format and normalization rules for usernames and emails.

Invariants:
    - Usernames are alphanumeric only and stored lowercase
    - Emails have the shape local@domain.tld and are stored lowercase
    - Failures are field-keyed: {"username": [...], "email": [...]}
"""

import re

from app.core.errors import FieldValidationError

BLANK = "can't be blank"
INVALID = "is invalid"
TAKEN = "is already taken."

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def _check(value: str | None, pattern: re.Pattern) -> list[str]:
    if value is None or not value.strip():
        return [BLANK]
    if not pattern.match(value.strip()):
        return [INVALID]
    return []


def normalize_identity(
    username: str | None = None,
    email: str | None = None,
    *,
    require_all: bool = True,
) -> dict[str, str]:
    """Validate and lowercase the given fields.

    With require_all=False only the fields actually supplied are checked,
    which is what partial profile updates need.
    """
    errors: dict[str, list[str]] = {}
    normalized: dict[str, str] = {}
    for name, value, pattern in (
        ("username", username, USERNAME_PATTERN),
        ("email", email, EMAIL_PATTERN),
    ):
        if value is None and not require_all:
            continue
        problems = _check(value, pattern)
        if problems:
            errors[name] = problems
        else:
            normalized[name] = value.strip().lower()
    if errors:
        raise FieldValidationError(errors)
    return normalized
