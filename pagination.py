# pagination.py
import logging
from typing import List, Tuple

from models import Country, Mode
from services import DatasetStore, filter_countries

logger = logging.getLogger(__name__)


class PaginationController:
    """Decides which countries are visible: pages of the full list, or search hits.

    In browse mode pages of ``page_size`` countries are appended as the user
    scrolls. A non-empty query switches to search mode, where every match is
    visible at once. Clearing the query restarts browsing from the first page
    instead of resuming the previous position.

    All methods are expected to be called from a single event loop.
    """
    def __init__(self, store: DatasetStore, page_size: int = 20):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.store = store
        self._page_size = page_size
        self._mode = Mode.BROWSE
        self._query = ""
        self._visible_search: List[Country] = []
        self._loading_page = False
        self._reset_browse()

    def _reset_browse(self) -> None:
        self._visible_browse: List[Country] = []
        self._next_page_index = 1
        self._has_more = True

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def query(self) -> str:
        return self._query

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def next_page_index(self) -> int:
        return self._next_page_index

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def visible_browse(self) -> Tuple[Country, ...]:
        return tuple(self._visible_browse)

    @property
    def visible_search(self) -> Tuple[Country, ...]:
        return tuple(self._visible_search)

    def _active(self) -> List[Country]:
        return self._visible_search if self._mode is Mode.SEARCH else self._visible_browse

    def visible_rows(self) -> Tuple[Country, ...]:
        return tuple(self._active())

    def visible_count(self) -> int:
        return len(self._active())

    def visible_at(self, index: int) -> Country:
        rows = self._active()
        if not 0 <= index < len(rows):
            raise IndexError(f"row {index} is outside the {len(rows)} visible rows")
        return rows[index]

    def on_data_ready(self) -> None:
        if self._mode is Mode.SEARCH:
            # The query arrived before the data did.
            self._visible_search = filter_countries(self.store.get(), self._query)
        elif not self._visible_browse:
            self.load_next_page()

    def load_next_page(self) -> None:
        if self._mode is not Mode.BROWSE or self._loading_page:
            return
        self._loading_page = True
        try:
            records = self.store.get()
            start = (self._next_page_index - 1) * self._page_size
            end = min(start + self._page_size, len(records))
            if start >= len(records):
                self._has_more = False
                return
            self._visible_browse = self._visible_browse + list(records[start:end])
            self._has_more = end < len(records)
            logger.debug("Loaded page %d (%d-%d of %d)", self._next_page_index, start, end, len(records))
            self._next_page_index += 1
        finally:
            self._loading_page = False

    def on_query_changed(self, query: str) -> None:
        self._query = query
        if query:
            self._mode = Mode.SEARCH
            self._visible_search = filter_countries(self.store.get(), query)
            logger.debug("Query %r matched %d countries", query, len(self._visible_search))
        else:
            self._mode = Mode.BROWSE
            self._visible_search = []
            self._reset_browse()
            self.load_next_page()

    def on_near_end_of_list(self, last_visible_index: int) -> None:
        if self._mode is not Mode.BROWSE:
            return
        if last_visible_index == len(self._visible_browse) - 1 and self._has_more:
            self.load_next_page()
