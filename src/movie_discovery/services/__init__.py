"""Service layer for external API integrations."""

from .appwrite import AppwriteService
from .tmdb import TMDbService
from .trending import TrendingService

__all__ = ["AppwriteService", "TMDbService", "TrendingService"]
