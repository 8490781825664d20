import pytest

from models import Country
from services import DatasetStore


def make_countries(n: int) -> list:
    return [
        Country(name=f"Country {i}", region=f"Region {i % 5}", code=f"C{i:03d}", capital=f"Capital {i}")
        for i in range(n)
    ]


@pytest.fixture
def store_of():
    def _store(countries):
        store = DatasetStore()
        store.load(countries)
        return store
    return _store
