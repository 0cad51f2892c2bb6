"""
IGDB module for game metadata.

This package handles:
- Twitch authentication and rate limited IGDB requests
- Response caching in the reviews database
"""

from .cache import NoOpCache, SqliteCache
from .client import IGDB
from .models import Cover, Genre, IGDBGame

__all__ = [
    "IGDB",
    "NoOpCache",
    "SqliteCache",
    "IGDBGame",
    "Genre",
    "Cover",
]
