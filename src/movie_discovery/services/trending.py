"""Trending searches backed by an Appwrite collection."""

import logging

from attrs import define

from ..errors import TrendingReadError, TrendingStoreError, TrendingWriteError
from ..models.tmdb import Movie
from ..models.trending import TrendingEntry, normalize_term
from .appwrite import AppwriteService, query_equal, query_limit, query_order_desc

logger = logging.getLogger(__name__)


@define
class TrendingService:
    """Counts successful searches per term and ranks them.

    Store failures never escape: writes are logged and dropped, reads
    degrade to an empty list. Two concurrent searches for the same term can
    both read the old count and write the same value; that loss is accepted.
    """

    store: AppwriteService
    default_limit: int = 5

    async def close(self) -> None:
        await self.store.close()

    async def record_search(self, term: str, movie: Movie) -> None:
        """Create or bump the counter for ``term``."""
        key = normalize_term(term)
        if not key:
            return
        try:
            existing = await self.store.list_documents([query_equal("searchTerm", key)])
            if existing:
                doc = existing[0]
                await self.store.update_document(
                    doc["$id"], {"count": int(doc.get("count", 0)) + 1}
                )
            else:
                await self.store.create_document(
                    {
                        "searchTerm": key,
                        "count": 1,
                        "movie_id": movie.id,
                        "poster_url": movie.poster_url,
                        "title": movie.title,
                    }
                )
        except (TrendingStoreError, KeyError, TypeError, ValueError) as e:
            err = TrendingWriteError(f"could not record search {key!r}: {e}")
            logger.error("%s", err)

    async def list_top_trending(self, limit: int | None = None) -> list[TrendingEntry]:
        """Return the most searched terms, highest count first."""
        if limit is None:
            limit = self.default_limit
        try:
            docs = await self.store.list_documents(
                [query_limit(limit), query_order_desc("count")]
            )
            entries = [TrendingEntry.from_document(doc) for doc in docs]
        except (TrendingStoreError, KeyError, TypeError, ValueError) as e:
            err = TrendingReadError(f"could not load trending movies: {e}")
            logger.error("%s", err)
            return []
        entries.sort(key=lambda e: e.count, reverse=True)
        return entries[:limit]
