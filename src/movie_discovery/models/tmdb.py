"""TMDb data models."""

from attrs import frozen


POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


@frozen
class Movie:
    """Represents a movie returned by TMDb search or discover."""

    id: int
    title: str
    poster_path: str | None = None
    popularity: float = 0.0
    vote_average: float | None = None
    release_date: str | None = None
    original_language: str | None = None

    @property
    def poster_url(self) -> str | None:
        if not self.poster_path:
            return None
        return f"{POSTER_BASE_URL}{self.poster_path}"

    @classmethod
    def from_api(cls, data: dict) -> "Movie":
        """Build a movie from a single entry of a TMDb ``results`` array."""
        return cls(
            id=data["id"],
            title=data.get("title") or data.get("original_title") or "",
            poster_path=data.get("poster_path"),
            popularity=float(data.get("popularity") or 0.0),
            vote_average=data.get("vote_average"),
            release_date=data.get("release_date") or None,
            original_language=data.get("original_language"),
        )
