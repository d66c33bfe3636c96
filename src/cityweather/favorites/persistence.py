"""Storage ports for the favorites list."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

logger: Final = logging.getLogger(__name__)

DEFAULT_KEY: Final = "favoritesCities"


def dedupe(names: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated names, keeping the first occurrence."""
    return tuple(dict.fromkeys(names))


@runtime_checkable
class PersistenceAdapter(Protocol):
    """Key/value port holding the serialized favorites list."""

    def load(self) -> tuple[str, ...]:
        """Read the stored favorites.

        Returns:
            Stored city names in insertion order; empty when nothing usable
            is stored
        """
        ...

    def save(self, favorites: tuple[str, ...]) -> bool:
        """Write the favorites.

        Returns:
            True when the write succeeded
        """
        ...


class JsonFilePersistence:
    """Favorites kept as one named record in a JSON document.

    The document looks like ``{"favoritesCities": ["Paris", "Rabat"]}``.
    Anything unreadable is treated as an empty list.
    """

    def __init__(self, path: Path, key: str = DEFAULT_KEY) -> None:
        self.path = path
        self.key = key

    def load(self) -> tuple[str, ...]:
        if not self.path.exists():
            return ()

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable favorites file %s: %s", self.path, exc)
            return ()

        record = document.get(self.key) if isinstance(document, dict) else None
        if record is None:
            return ()
        if not isinstance(record, list) or not all(isinstance(n, str) for n in record):
            logger.warning("Ignoring malformed favorites record %r in %s", self.key, self.path)
            return ()
        return dedupe(record)

    def save(self, favorites: tuple[str, ...]) -> bool:
        payload = json.dumps({self.key: list(favorites)}, ensure_ascii=False, indent=2)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".favorites-")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.warning("Could not save favorites to %s: %s", self.path, exc)
            if tmp_name is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
            return False
        logger.debug("Saved %d favorites to %s", len(favorites), self.path)
        return True


class MemoryPersistence:
    """In-process adapter; records every write."""

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self.stored: tuple[str, ...] = dedupe(initial)
        self.writes: list[tuple[str, ...]] = []

    def load(self) -> tuple[str, ...]:
        return self.stored

    def save(self, favorites: tuple[str, ...]) -> bool:
        self.stored = tuple(favorites)
        self.writes.append(self.stored)
        return True
