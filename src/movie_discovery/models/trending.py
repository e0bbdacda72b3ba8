"""Trending store data models."""

from attrs import frozen


@frozen
class TrendingEntry:
    """A search term with its running count and representative movie."""

    document_id: str
    search_term: str
    count: int
    movie_id: int | None = None
    poster_url: str | None = None
    title: str | None = None

    @classmethod
    def from_document(cls, doc: dict) -> "TrendingEntry":
        """Build an entry from an Appwrite document."""
        return cls(
            document_id=doc["$id"],
            search_term=doc.get("searchTerm", ""),
            count=int(doc.get("count", 0)),
            movie_id=doc.get("movie_id"),
            poster_url=doc.get("poster_url"),
            title=doc.get("title"),
        )


def normalize_term(term: str) -> str:
    """Return the store key for a search term: trimmed, case kept."""
    return term.strip()
