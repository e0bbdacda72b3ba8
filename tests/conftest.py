"""Shared fakes for the HTTP services."""

import itertools
import json

import httpx
import pytest

from movie_discovery.models.tmdb import Movie
from movie_discovery.models.trending import TrendingEntry
from movie_discovery.services.appwrite import AppwriteService
from movie_discovery.services.tmdb import TMDbService
from movie_discovery.services.trending import TrendingService


TMDB_BASE = "https://api.themoviedb.org/3"
APPWRITE_BASE = "https://cloud.appwrite.io/v1"


class FakeAppwrite:
    """In-memory stand-in for one Appwrite documents collection."""

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path.endswith("/documents"):
            return self._list(request.url.params.get_list("queries[]"))
        if request.method == "POST" and path.endswith("/documents"):
            body = json.loads(request.content)
            doc_id = f"doc{next(self._ids)}"
            doc = {"$id": doc_id, **body["data"]}
            self.documents[doc_id] = doc
            return httpx.Response(201, json=doc)
        if request.method == "PATCH":
            doc_id = path.rsplit("/", 1)[-1]
            if doc_id not in self.documents:
                return httpx.Response(404, json={"message": "Document not found"})
            self.documents[doc_id].update(json.loads(request.content)["data"])
            return httpx.Response(200, json=self.documents[doc_id])
        return httpx.Response(405)

    def _list(self, queries: list[str]) -> httpx.Response:
        docs = list(self.documents.values())
        limit = 25
        for raw in queries:
            q = json.loads(raw)
            if q["method"] == "equal":
                docs = [d for d in docs if d.get(q["attribute"]) in q["values"]]
            elif q["method"] == "orderDesc":
                docs.sort(key=lambda d: d.get(q["attribute"], 0), reverse=True)
            elif q["method"] == "limit":
                limit = q["values"][0]
        docs = docs[:limit]
        return httpx.Response(200, json={"total": len(docs), "documents": docs})


class FakeCatalog:
    """Catalog that answers every search with one movie named after the term."""

    def __init__(self):
        self.calls: list[str] = []
        self.closed = False

    async def search(self, term):
        self.calls.append(term)
        return [Movie(id=len(self.calls), title=term or "Popular")]

    async def get_movie(self, movie_id):
        if movie_id == 404:
            return None
        return Movie(id=movie_id, title="Heat", poster_path="/heat.jpg")

    async def close(self):
        self.closed = True


class FakeTrending:
    def __init__(self):
        self.closed = False

    async def list_top_trending(self, limit=None):
        return [TrendingEntry(document_id="d1", search_term="dune", count=4)]

    async def close(self):
        self.closed = True


def make_appwrite(handler) -> AppwriteService:
    return AppwriteService(
        endpoint=APPWRITE_BASE,
        project_id="project",
        database_id="db",
        collection_id="metrics",
        client=httpx.AsyncClient(
            base_url=APPWRITE_BASE, transport=httpx.MockTransport(handler)
        ),
    )


def make_tmdb(handler, trending: TrendingService | None = None) -> TMDbService:
    return TMDbService(
        read_access_token="token",
        trending=trending,
        client=httpx.AsyncClient(
            base_url=TMDB_BASE, transport=httpx.MockTransport(handler)
        ),
    )


def movie_payload(movie_id: int, title: str, poster: str | None = "/p.jpg") -> dict:
    return {
        "id": movie_id,
        "title": title,
        "poster_path": poster,
        "popularity": 12.5,
        "vote_average": 7.1,
        "release_date": "2021-10-22",
        "original_language": "en",
    }


@pytest.fixture
def fake_appwrite() -> FakeAppwrite:
    return FakeAppwrite()


@pytest.fixture
def trending(fake_appwrite) -> TrendingService:
    return TrendingService(store=make_appwrite(fake_appwrite.handler))
