# services.py
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import httpx

from models import Country, DecodeFailed, FetchError, NetworkFailed

logger = logging.getLogger(__name__)

_COUNTRY_FIELDS = ("name", "region", "code", "capital")


class DatasetStore:
    """Holds the full, unfiltered country list in fetch order."""
    def __init__(self):
        self._all: Tuple[Country, ...] = ()
        self._ready = False

    def load(self, records: Iterable[Country]) -> None:
        self._all = tuple(records)
        self._ready = True
        logger.info("Dataset loaded with %d countries", len(self._all))

    def get(self) -> Tuple[Country, ...]:
        return self._all

    @property
    def is_ready(self) -> bool:
        return self._ready

    def __len__(self) -> int:
        return len(self._all)


def filter_countries(records: Sequence[Country], query: str) -> List[Country]:
    """Returns the records matching the query, keeping their original order.

    A record matches when the lowercased query is a substring of its name,
    code, region or capital. An empty query matches nothing; callers treat
    "no query" as browse mode rather than as an empty search.
    """
    if not query:
        return []
    needle = query.lower()
    return [
        c for c in records
        if needle in c.name.lower()
        or needle in c.code.lower()
        or needle in c.region.lower()
        or needle in c.capital.lower()
    ]


class CountryFetchService:
    """A service to download and decode the country dataset."""
    def __init__(self, url: str, timeout: float, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self) -> Tuple[Optional[List[Country]], Optional[FetchError]]:
        """Fetches the dataset, returning either the countries or the error."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Fetching %s failed: %s", self.url, e)
            return None, NetworkFailed(e)

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("Response from %s is not valid JSON", self.url)
            return None, DecodeFailed("response is not valid JSON", e)

        try:
            return self._parse_payload(payload), None
        except DecodeFailed as e:
            logger.warning("Response from %s has an unexpected shape: %s", self.url, e.reason)
            return None, e

    def _parse_payload(self, payload) -> List[Country]:
        """Parses the whole payload; a single bad item rejects everything."""
        if not isinstance(payload, list):
            raise DecodeFailed(f"expected a JSON array, got {type(payload).__name__}")
        return [self._parse_item(i, item) for i, item in enumerate(payload)]

    def _parse_item(self, position: int, item) -> Country:
        if not isinstance(item, dict):
            raise DecodeFailed(f"item {position} is not an object")
        for field_name in _COUNTRY_FIELDS:
            if not isinstance(item.get(field_name), str):
                raise DecodeFailed(f"item {position} has no string field '{field_name}'")
        return Country(**{f: item[f] for f in _COUNTRY_FIELDS})
