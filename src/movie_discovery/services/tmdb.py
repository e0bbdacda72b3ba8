"""TMDb API service for movie search and discovery."""

import asyncio
import logging
from urllib.parse import quote

import httpx
from attrs import define, field

from ..errors import DomainError, TransportError
from ..models.tmdb import Movie
from .trending import TrendingService

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Error fetching movies. Please try again later"
DOMAIN_FAILED_MESSAGE = "Failed to fetch movies"


@define
class TMDbService:
    """Client for TMDb API.

    Successful non-empty searches are reported to ``trending`` from a
    detached task so that a slow or broken store never holds up results.
    """

    read_access_token: str
    base_url: str = "https://api.themoviedb.org/3"
    trending: TrendingService | None = None
    _client: httpx.AsyncClient | None = None
    _background: set[asyncio.Task] = field(factory=set, init=False)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.read_access_token}",
                    "Accept": "application/json",
                },
                timeout=30.0,
            )
        return self._client

    async def close(self) -> None:
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, url: str) -> dict:
        client = await self._get_client()
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error while fetching movies from %s: %s", url, e)
            raise TransportError(FETCH_FAILED_MESSAGE) from e

    async def search(self, term: str) -> list[Movie]:
        """Search movies by title, or list popular movies for an empty term."""
        if term:
            url = f"/search/movie?query={quote(term, safe='')}"
        else:
            url = "/discover/movie?sort_by=popularity.desc"

        data = await self._get_json(url)
        if not isinstance(data, dict):
            logger.error("Unexpected payload type from %s: %s", url, type(data))
            raise TransportError(FETCH_FAILED_MESSAGE)

        if data.get("Response") == "False":
            raise DomainError(data.get("Error") or DOMAIN_FAILED_MESSAGE)

        try:
            movies = [Movie.from_api(item) for item in data.get("results") or []]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed movie results from %s: %s", url, e)
            raise TransportError(FETCH_FAILED_MESSAGE) from e

        if term and movies:
            self._record_in_background(term, movies[0])
        return movies

    async def get_movie(self, movie_id: int) -> Movie | None:
        """Fetch a single movie by TMDb ID, or None if it does not exist."""
        client = await self._get_client()
        try:
            resp = await client.get(f"/movie/{movie_id}")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return Movie.from_api(resp.json())
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("Error while fetching movie %s: %s", movie_id, e)
            raise TransportError(FETCH_FAILED_MESSAGE) from e

    def _record_in_background(self, term: str, movie: Movie) -> None:
        if self.trending is None:
            return
        task = asyncio.create_task(self.trending.record_search(term, movie))
        self._background.add(task)
        task.add_done_callback(self._on_record_done)

    def _on_record_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Trending update failed: %s", exc)

    async def wait_background(self) -> None:
        """Wait for outstanding trending updates to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
