"""Tests for core.identity_rules — username/email normalization and field-keyed errors."""

import pytest

from app.core.errors import FieldValidationError
from app.core.identity_rules import BLANK, INVALID, normalize_identity


def test_normalizes_to_lowercase():
    assert normalize_identity("Alice", "A@X.com") == {
        "username": "alice", "email": "a@x.com",
    }


def test_rejects_non_alphanumeric_username():
    with pytest.raises(FieldValidationError) as exc:
        normalize_identity("al ice", "a@x.com")
    assert exc.value.fields == {"username": [INVALID]}


def test_rejects_malformed_email():
    with pytest.raises(FieldValidationError) as exc:
        normalize_identity("alice", "not-an-email")
    assert exc.value.fields == {"email": [INVALID]}


def test_reports_every_blank_field():
    with pytest.raises(FieldValidationError) as exc:
        normalize_identity(None, "  ")
    assert exc.value.fields == {"username": [BLANK], "email": [BLANK]}


def test_partial_mode_skips_missing_fields():
    assert normalize_identity(email="B@Y.org", require_all=False) == {
        "email": "b@y.org",
    }
    assert normalize_identity(require_all=False) == {}


def test_partial_mode_still_rejects_blank_supplied_field():
    with pytest.raises(FieldValidationError):
        normalize_identity(username="", require_all=False)


def test_field_errors_render_in_envelope():
    err = FieldValidationError({"email": ["is already taken."]})
    body = err.to_response()
    assert err.http_status == 422
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["fields"] == {"email": ["is already taken."]}
