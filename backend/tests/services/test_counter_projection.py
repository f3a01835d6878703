"""Favorite count projection — favorites_count equals the favorite edge count.

Invariants:
    - recompute(a) == |{u : a in u.favorites}| after any edge sequence
    - rebuild_all repairs counts that were never (or wrongly) recomputed
    - recompute of an unknown article raises ResourceNotFoundError
"""

from uuid import uuid4

import pytest
from sqlalchemy import select, update

from app.core.errors import ResourceNotFoundError
from app.models.article import Article
from app.services import articles
from app.services.counter_projection import FavoriteCountProjection
from app.services.relation_graph import favorite_graph


async def _stored_count(db, article_id) -> int:
    return await db.scalar(
        select(Article.favorites_count).where(Article.id == article_id),
    )


async def test_recompute_counts_favoriting_users(
    test_db, alice, bob, carol, alice_article,
):
    graph = favorite_graph(test_db)
    for user in (alice, bob, carol):
        await graph.add(user.id, alice_article.id)
    await graph.remove(bob.id, alice_article.id)

    count = await FavoriteCountProjection(test_db).recompute(alice_article.id)
    await test_db.commit()

    assert count == 2
    assert await _stored_count(test_db, alice_article.id) == 2


async def test_recompute_after_arbitrary_sequence(test_db, alice, bob, alice_article):
    graph = favorite_graph(test_db)
    projection = FavoriteCountProjection(test_db)
    ops = [
        (graph.add, alice), (graph.add, alice), (graph.remove, bob),
        (graph.add, bob), (graph.remove, alice), (graph.add, alice),
        (graph.remove, bob),
    ]
    for op, user in ops:
        await op(user.id, alice_article.id)
    assert await projection.recompute(alice_article.id) == 1


async def test_recompute_only_touches_target_article(test_db, alice, bob, alice_article):
    other = await articles.create_article(test_db, bob, title="Other")
    await favorite_graph(test_db).add(alice.id, other.id)
    await FavoriteCountProjection(test_db).recompute(other.id)
    await test_db.commit()
    assert await _stored_count(test_db, other.id) == 1
    assert await _stored_count(test_db, alice_article.id) == 0


async def test_rebuild_all_repairs_stale_counts(test_db, alice, bob, alice_article):
    await favorite_graph(test_db).add(bob.id, alice_article.id)
    await test_db.execute(
        update(Article).where(Article.id == alice_article.id)
        .values(favorites_count=42)
    )
    await test_db.commit()

    refreshed = await FavoriteCountProjection(test_db).rebuild_all()
    await test_db.commit()

    assert refreshed == 1
    assert await _stored_count(test_db, alice_article.id) == 1


async def test_recompute_unknown_article_raises(test_db):
    with pytest.raises(ResourceNotFoundError):
        await FavoriteCountProjection(test_db).recompute(uuid4())
