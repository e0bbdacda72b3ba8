"""View state controller for the search and trending flows."""

import logging
from typing import Callable

from .errors import CatalogError
from .models.view import ViewState
from .services.tmdb import TMDbService
from .services.trending import TrendingService

logger = logging.getLogger(__name__)

Listener = Callable[[ViewState], None]


class ViewController:
    """Owns the session's ViewState and moves it through its transitions.

    Each search gets a sequence token. A completed search only updates the
    state if its token is still the newest one issued; otherwise the result
    belongs to a superseded term and is dropped.
    """

    def __init__(self, catalog: TMDbService, trending: TrendingService | None = None):
        self.catalog = catalog
        self.trending = trending
        self._state = ViewState()
        self._seq = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("View state listener failed")

    async def search(self, term: str) -> ViewState:
        self._seq += 1
        token = self._seq
        self._set_state(self._state.loading(term))

        try:
            movies = await self.catalog.search(term)
        except CatalogError as e:
            if token != self._seq:
                logger.debug("Dropping stale error for %r", term)
                return self._state
            self._set_state(self._state.failed(e.message))
            return self._state

        if token != self._seq:
            logger.debug("Dropping stale results for %r", term)
            return self._state
        self._set_state(self._state.succeeded(movies))
        return self._state

    async def load_trending(self) -> ViewState:
        if self.trending is None:
            return self._state
        entries = await self.trending.list_top_trending()
        self._set_state(self._state.with_trending(entries))
        return self._state
