"""Presenters — build the outbound view models from records and relation flags.

Invariants:
    - Anonymous viewer (None) -> following/favorited are False, no relation lookup
    - Viewing your own profile -> following is False (self-follow is never stored)
    - auth_user_view issues a fresh token on every call
    - favoritesCount is read from the cached column, never recounted here
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.tokens import TokenService
from app.models.article import Article
from app.models.user import User
from app.schemas.article import ArticleView
from app.schemas.profile import Profile
from app.schemas.user import AuthUser
from app.services.relation_graph import favorite_graph, follow_graph


def _image(user: User) -> str:
    return user.image or get_settings().default_image


async def profile_view(
    db: AsyncSession, profile: User, viewer: User | None,
) -> Profile:
    following = False
    if viewer is not None and viewer.id != profile.id:
        following = await follow_graph(db).exists(viewer.id, profile.id)
    return Profile(
        username=profile.username,
        bio=profile.bio,
        image=_image(profile),
        following=following,
    )


def auth_user_view(user: User, tokens: TokenService) -> AuthUser:
    return AuthUser(
        username=user.username,
        email=user.email,
        bio=user.bio,
        image=_image(user),
        token=tokens.issue(user),
    )


async def article_view(
    db: AsyncSession, article: Article, viewer: User | None,
) -> ArticleView:
    favorited = False
    if viewer is not None:
        favorited = await favorite_graph(db).exists(viewer.id, article.id)
    return ArticleView(
        slug=article.slug,
        title=article.title,
        description=article.description,
        body=article.body,
        tag_list=list(article.tag_list or []),
        created_at=article.created_at,
        updated_at=article.updated_at,
        favorites_count=article.favorites_count,
        favorited=favorited,
        author=await profile_view(db, article.author, viewer),
    )
