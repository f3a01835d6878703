"""Rebuild denormalized favorites_count for every article from the favorite edges.

Usage:
    python -m app.rebuild_counters
    python -m app.rebuild_counters --database-url sqlite+aiosqlite:///conduit.db
"""

import argparse
import asyncio
import logging

from app.config import get_settings
from app.db.session import create_session_factory
from app.infrastructure.observability import setup_logging
from app.services.counter_projection import FavoriteCountProjection

logger = logging.getLogger(__name__)


async def rebuild(database_url: str) -> int:
    engine, factory = create_session_factory(database_url)
    try:
        async with factory() as db:
            refreshed = await FavoriteCountProjection(db).rebuild_all()
            await db.commit()
    finally:
        await engine.dispose()
    return refreshed


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--database-url", default=settings.database_url)
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, settings.log_format)
    refreshed = asyncio.run(rebuild(args.database_url))
    logger.info(f"favorites_count rebuilt for {refreshed} articles")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
