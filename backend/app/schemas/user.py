"""User Schemas — registration, login, and self-profile payloads.

Invariants:
    - Request bodies are wrapped in {"user": {...}}
    - Field presence/format checks happen in core.identity_rules, so every
      request field is optional here and errors come back field-keyed
    - AuthUser.token is freshly issued for every response of this shape
"""

from pydantic import BaseModel, Field


class NewUser(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class NewUserRequest(BaseModel):
    user: NewUser


class LoginUser(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    user: LoginUser


class UpdateUser(BaseModel):
    """Partial update — only fields present in the body are applied."""
    username: str | None = None
    email: str | None = None
    bio: str | None = Field(None, max_length=5000)
    image: str | None = Field(None, max_length=2048)
    password: str | None = None


class UpdateUserRequest(BaseModel):
    user: UpdateUser


class AuthUser(BaseModel):
    username: str
    email: str
    bio: str | None = None
    image: str
    token: str


class UserResponse(BaseModel):
    user: AuthUser
