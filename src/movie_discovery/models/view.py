"""View state snapshots handed to presentation."""

from enum import Enum

from attrs import evolve, field, frozen

from .tmdb import Movie
from .trending import TrendingEntry


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@frozen
class ViewState:
    """Immutable snapshot of the search session.

    New snapshots are only produced through the transition methods below.
    """

    phase: Phase = Phase.IDLE
    search_term: str = ""
    error_message: str = ""
    movie_list: tuple[Movie, ...] = field(default=(), converter=tuple)
    trending_movies: tuple[TrendingEntry, ...] = field(default=(), converter=tuple)

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    def loading(self, term: str) -> "ViewState":
        return evolve(self, phase=Phase.LOADING, search_term=term, error_message="")

    def succeeded(self, movies: list[Movie]) -> "ViewState":
        return evolve(self, phase=Phase.SUCCESS, error_message="", movie_list=movies)

    def failed(self, message: str) -> "ViewState":
        return evolve(self, phase=Phase.ERROR, error_message=message, movie_list=())

    def with_trending(self, entries: list[TrendingEntry]) -> "ViewState":
        return evolve(self, trending_movies=entries)

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "search_term": self.search_term,
            "is_loading": self.is_loading,
            "error_message": self.error_message,
            "movie_list": [
                {
                    "id": m.id,
                    "title": m.title,
                    "poster_url": m.poster_url,
                    "popularity": m.popularity,
                    "vote_average": m.vote_average,
                    "release_date": m.release_date,
                }
                for m in self.movie_list
            ],
            "trending_movies": [
                {
                    "rank": rank,
                    "search_term": e.search_term,
                    "count": e.count,
                    "title": e.title,
                    "poster_url": e.poster_url,
                }
                for rank, e in enumerate(self.trending_movies, start=1)
            ],
        }
