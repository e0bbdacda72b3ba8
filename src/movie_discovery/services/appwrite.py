"""Appwrite document API service for the trending collection."""

import json
from typing import Any

import httpx
from attrs import define

from ..errors import TrendingStoreError


def query_equal(attribute: str, value: Any) -> str:
    return json.dumps({"method": "equal", "attribute": attribute, "values": [value]})


def query_order_desc(attribute: str) -> str:
    return json.dumps({"method": "orderDesc", "attribute": attribute})


def query_limit(limit: int) -> str:
    return json.dumps({"method": "limit", "values": [limit]})


@define
class AppwriteService:
    """Client for one Appwrite database collection over REST."""

    endpoint: str
    project_id: str
    database_id: str
    collection_id: str
    api_key: str | None = None
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "Content-Type": "application/json",
                "X-Appwrite-Project": self.project_id,
            }
            if self.api_key:
                headers["X-Appwrite-Key"] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.endpoint,
                headers=headers,
                timeout=30.0,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def _documents_path(self) -> str:
        return (
            f"/databases/{self.database_id}"
            f"/collections/{self.collection_id}/documents"
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict:
        client = await self._get_client()
        try:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TrendingStoreError(f"{method} {url} failed: {e}") from e
        if not isinstance(data, dict):
            raise TrendingStoreError(
                f"{method} {url} returned {type(data).__name__}, expected an object"
            )
        return data

    async def list_documents(self, queries: list[str] | None = None) -> list[dict]:
        """List documents matching the given Appwrite query strings."""
        params = [("queries[]", q) for q in queries or []]
        data = await self._request("GET", self._documents_path, params=params)
        documents = data.get("documents", [])
        if not isinstance(documents, list) or not all(
            isinstance(doc, dict) for doc in documents
        ):
            raise TrendingStoreError(f"malformed documents list: {documents!r}")
        return documents

    async def create_document(self, data: dict, document_id: str = "unique()") -> dict:
        """Create a document; ``unique()`` lets the server pick the ID."""
        return await self._request(
            "POST",
            self._documents_path,
            json={"documentId": document_id, "data": data},
        )

    async def update_document(self, document_id: str, data: dict) -> dict:
        """Patch the given fields of an existing document."""
        return await self._request(
            "PATCH",
            f"{self._documents_path}/{document_id}",
            json={"data": data},
        )
