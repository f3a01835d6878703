"""Profile Schemas — the public view of an identity record."""

from pydantic import BaseModel


class Profile(BaseModel):
    """Public profile. `following` is always False for anonymous viewers."""
    username: str
    bio: str | None = None
    image: str
    following: bool = False


class ProfileResponse(BaseModel):
    profile: Profile
