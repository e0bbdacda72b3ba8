"""A single interactive search session: debouncer wired to the controller."""

import asyncio
import logging

from .config import Settings
from .controller import ViewController
from .debounce import Debouncer
from .models.view import ViewState
from .services.appwrite import AppwriteService
from .services.tmdb import TMDbService
from .services.trending import TrendingService

logger = logging.getLogger(__name__)


class MovieSession:
    def __init__(
        self,
        controller: ViewController,
        delay: float = 0.5,
    ):
        self.controller = controller
        self.debouncer = Debouncer(delay, self._on_settled)
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Settings) -> "MovieSession":
        store = AppwriteService(
            endpoint=settings.appwrite_endpoint,
            project_id=settings.appwrite_project_id,
            database_id=settings.appwrite_database_id,
            collection_id=settings.appwrite_collection_id,
            api_key=settings.appwrite_api_key,
        )
        trending = TrendingService(store=store, default_limit=settings.trending_limit)
        catalog = TMDbService(
            read_access_token=settings.tmdb_read_access_token,
            base_url=settings.tmdb_base_url,
            trending=trending,
        )
        return cls(
            ViewController(catalog, trending),
            delay=settings.search_debounce_ms / 1000,
        )

    @property
    def state(self) -> ViewState:
        return self.controller.state

    def mount(self) -> None:
        """Load trending and run the initial (empty term) listing."""
        self._spawn(self.controller.load_trending())
        self._spawn(self.controller.search(""))

    def type(self, text: str) -> None:
        """Feed the current contents of the search box."""
        self.debouncer.push(text)

    def _on_settled(self, term: str) -> None:
        self._spawn(self.controller.search(term))

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> ViewState:
        """Wait until no settled search or trending load is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self.state

    async def close(self) -> None:
        self.debouncer.close()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.controller.catalog.close()
        if self.controller.trending is not None:
            await self.controller.trending.close()
