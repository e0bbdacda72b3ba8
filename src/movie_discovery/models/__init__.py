"""Data models for Movie Discovery."""

from .tmdb import Movie
from .trending import TrendingEntry, normalize_term
from .view import Phase, ViewState

__all__ = ["Movie", "TrendingEntry", "normalize_term", "Phase", "ViewState"]
