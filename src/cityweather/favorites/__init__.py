"""Favorite cities and their persistence."""

from .persistence import JsonFilePersistence, MemoryPersistence, PersistenceAdapter
from .store import FavoritesStore

__all__ = [
    "FavoritesStore",
    "JsonFilePersistence",
    "MemoryPersistence",
    "PersistenceAdapter",
]
