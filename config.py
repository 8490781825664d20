# config.py
from dataclasses import dataclass

@dataclass
class Config:
    """Holds all application configuration."""
    PAGE_SIZE: int = 20
    DATASET_URL: str = (
        "https://gist.githubusercontent.com/peymano-wmt/32dcb892b06648910ddd40406e37fdab"
        "/raw/db25946fd77c5873b0303b858e861ce724e0dcd0/countries.json"
    )
    REQUEST_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"
