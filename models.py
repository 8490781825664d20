# models.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

@dataclass(frozen=True)
class Country:
    """A single country record as served by the dataset endpoint."""
    name: str
    region: str
    code: str
    capital: str

    def summary(self) -> str:
        return f"{self.name} ({self.code}), {self.region}. Capital: {self.capital}"


class Mode(Enum):
    BROWSE = "browse"
    SEARCH = "search"


class FetchError(Exception):
    """Base class for failures while obtaining the country dataset."""


class NetworkFailed(FetchError):
    """The dataset could not be retrieved over the network."""
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network request failed: {cause}")


class DecodeFailed(FetchError):
    """The payload did not match the expected list of country objects."""
    def __init__(self, reason: str, cause: Optional[Exception] = None):
        self.reason = reason
        self.cause = cause
        super().__init__(f"Could not decode countries: {reason}")
