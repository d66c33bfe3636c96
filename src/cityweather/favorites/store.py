"""In-memory favorites synchronized to a persistence adapter."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from typing import Final

from .persistence import PersistenceAdapter

logger: Final = logging.getLogger(__name__)


class FavoritesStore:
    """Ordered, duplicate-free set of favorite city names.

    Loaded once from the adapter and written back after every mutation.
    Names are compared exactly, without case folding, after surrounding
    whitespace is stripped.

    Inside a running event loop the write happens in a worker thread, so
    ``toggle`` never blocks the loop; writes are chained so they land in
    mutation order. Outside a loop the write is done inline.
    """

    def __init__(self, adapter: PersistenceAdapter) -> None:
        self.adapter = adapter
        self._names: tuple[str, ...] = tuple(adapter.load())
        self._pending: asyncio.Task[bool] | None = None
        logger.debug("Loaded %d favorites", len(self._names))

    @property
    def favorites(self) -> tuple[str, ...]:
        return self._names

    @staticmethod
    def normalize(city: str) -> str:
        """Strip ``city`` and reject blank names.

        Raises:
            ValueError: If nothing but whitespace is left
        """
        name = city.strip()
        if not name:
            raise ValueError("city name cannot be empty")
        return name

    def contains(self, city: str) -> bool:
        return city.strip() in self._names

    def toggle(self, city: str) -> tuple[str, ...]:
        """Remove ``city`` if present, otherwise append it.

        The in-memory change is immediate; the save follows (see class
        docstring). A failed save is logged and the change is kept.

        Returns:
            The favorites after the change

        Raises:
            ValueError: If ``city`` is blank
        """
        name = self.normalize(city)
        if name in self._names:
            self._names = tuple(n for n in self._names if n != name)
        else:
            self._names = (*self._names, name)

        self._schedule_save(self._names)
        return self._names

    async def flush(self) -> None:
        """Wait until every save scheduled so far has finished."""
        if self._pending is not None:
            await self._pending

    def _schedule_save(self, names: tuple[str, ...]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._save(names)
            return
        previous = self._pending
        if previous is not None and (previous.done() or previous.get_loop() is not loop):
            previous = None
        self._pending = loop.create_task(self._save_after(previous, names))

    async def _save_after(self, previous: asyncio.Task[bool] | None, names: tuple[str, ...]) -> bool:
        if previous is not None:
            await previous
        return await asyncio.to_thread(self._save, names)

    def _save(self, names: tuple[str, ...]) -> bool:
        if not self.adapter.save(names):
            logger.warning("Favorites not persisted; keeping %d in memory", len(names))
            return False
        return True

    def __contains__(self, city: object) -> bool:
        return isinstance(city, str) and self.contains(city)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
