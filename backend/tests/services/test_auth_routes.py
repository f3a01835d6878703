"""Auth routes — registration/login responses and required vs optional token modes.

Invariants:
    - Every {"user": ...} response carries a fresh, verifiable token
    - required mode: no token -> 401 CREDENTIALS_MISSING
    - optional mode: no token -> anonymous; bad token -> 401 TOKEN_INVALID;
      token for a vanished user -> 401 CREDENTIALS_INVALID
    - expired token -> 401 TOKEN_EXPIRED
    - other auth schemes are treated as "no token"
"""

import time
from uuid import uuid4

from app.config import get_settings
from app.core.tokens import TokenConfig, TokenService, TokenSubject


async def test_register_returns_auth_user(client, tokens):
    res = await client.post("/api/users", json={
        "user": {"username": "alice", "email": "a@x.com", "password": "secret123"},
    })
    assert res.status_code == 201
    user = res.json()["user"]
    assert user["username"] == "alice"
    assert user["email"] == "a@x.com"
    assert user["image"].startswith("https://")
    assert "password" not in user and "hash" not in str(user)
    assert tokens.verify(user["token"]).username == "alice"


async def test_register_invalid_fields_are_field_keyed(client):
    res = await client.post("/api/users", json={
        "user": {"username": "not valid!", "email": "nope", "password": "x"},
    })
    assert res.status_code == 422
    fields = res.json()["error"]["fields"]
    assert fields == {"username": ["is invalid"], "email": ["is invalid"]}


async def test_register_duplicate_is_422(client, alice):
    res = await client.post("/api/users", json={
        "user": {"username": "alice", "email": "new@x.com", "password": "pw"},
    })
    assert res.status_code == 422
    assert res.json()["error"]["fields"] == {"username": ["is already taken."]}


async def test_login_with_correct_password(client, alice, tokens):
    res = await client.post("/api/users/login", json={
        "user": {"email": "a@x.com", "password": "secret123"},
    })
    assert res.status_code == 200
    assert tokens.verify(res.json()["user"]["token"]).id == alice.id


async def test_login_with_wrong_password_is_401(client, alice):
    res = await client.post("/api/users/login", json={
        "user": {"email": "a@x.com", "password": "wrong"},
    })
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CREDENTIALS_INVALID"


async def test_login_missing_email_is_422(client):
    res = await client.post("/api/users/login", json={"user": {"password": "x"}})
    assert res.status_code == 422
    assert res.json()["error"]["fields"] == {"email": ["can't be blank"]}


async def test_current_user_requires_token(client):
    res = await client.get("/api/user")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CREDENTIALS_MISSING"


async def test_current_user_with_token(client, alice, auth_header):
    res = await client.get("/api/user", headers=auth_header(alice))
    assert res.status_code == 200
    assert res.json()["user"]["email"] == "a@x.com"


async def test_bearer_scheme_is_not_accepted(client, alice, tokens):
    res = await client.get(
        "/api/user", headers={"Authorization": f"Bearer {tokens.issue(alice)}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CREDENTIALS_MISSING"


async def test_token_from_other_key_is_invalid(client, alice):
    foreign = TokenService(TokenConfig(secret="someone-else")).issue(alice)
    res = await client.get("/api/user", headers={"Authorization": f"Token {foreign}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_INVALID"


async def test_expired_token_is_rejected(client, alice, tokens):
    issued_long_ago = time.time() - tokens.ttl.total_seconds() - 5
    stale = tokens.issue(alice, now=issued_long_ago)
    res = await client.get("/api/user", headers={"Authorization": f"Token {stale}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_EXPIRED"


async def test_token_for_deleted_subject_is_invalid_credentials(client, tokens):
    ghost = tokens.issue(TokenSubject(id=uuid4(), username="ghost"))
    res = await client.get("/api/user", headers={"Authorization": f"Token {ghost}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CREDENTIALS_INVALID"


async def test_optional_mode_rejects_token_for_deleted_subject(client, alice, tokens):
    ghost = tokens.issue(TokenSubject(id=uuid4(), username="ghost"))
    res = await client.get(
        "/api/profiles/alice", headers={"Authorization": f"Token {ghost}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CREDENTIALS_INVALID"


async def test_optional_mode_allows_anonymous(client, alice):
    res = await client.get("/api/profiles/alice")
    assert res.status_code == 200
    assert res.json()["profile"]["following"] is False


async def test_optional_mode_rejects_bad_token(client, alice):
    res = await client.get(
        "/api/profiles/alice", headers={"Authorization": "Token garbage"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_INVALID"


async def test_update_user_returns_fresh_token(client, alice, auth_header, tokens):
    res = await client.put(
        "/api/user", headers=auth_header(alice),
        json={"user": {"bio": "I write things", "image": "https://img/a.png"}},
    )
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["bio"] == "I write things"
    assert user["image"] == "https://img/a.png"
    assert tokens.verify(user["token"]).id == alice.id


async def test_update_user_null_clears_bio_and_image(client, alice, auth_header):
    await client.put(
        "/api/user", headers=auth_header(alice),
        json={"user": {"bio": "I write things", "image": "https://img/a.png"}},
    )
    res = await client.put(
        "/api/user", headers=auth_header(alice),
        json={"user": {"bio": None, "image": None}},
    )
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["bio"] is None
    assert user["image"] == get_settings().default_image


async def test_update_password_then_login(client, alice, auth_header):
    await client.put(
        "/api/user", headers=auth_header(alice),
        json={"user": {"password": "brandnew1"}},
    )
    old = await client.post("/api/users/login", json={
        "user": {"email": "a@x.com", "password": "secret123"},
    })
    new = await client.post("/api/users/login", json={
        "user": {"email": "a@x.com", "password": "brandnew1"},
    })
    assert old.status_code == 401
    assert new.status_code == 200
