"""
StoreGate API - Resource Repositories
======================================

What:  Abstract list/append interface over a resource collection, plus the
       in-process implementation used by default.
How:   Route handlers depend on the Repository interface only; the concrete
       instance is built by the application factory and handed to handlers
       through FastAPI dependencies (see app.dependencies).
Who:   Users and products routes.

Contract:
    - list() returns the collection in insertion order
    - next_id() returns the id the next appended item must use
    - append() adds an item at the end and returns it
    There are no update or delete operations.

Swapping the storage:
    A database-backed repository only has to implement these three
    coroutines; handlers and gates stay unchanged.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Append-only collection of resources."""

    @abstractmethod
    async def list(self) -> List[T]:
        """Return every item, oldest first."""
        ...

    @abstractmethod
    async def next_id(self) -> int:
        """Return the identifier for the next appended item."""
        ...

    @abstractmethod
    async def append(self, item: T) -> T:
        """Store an item at the end of the collection and return it."""
        ...


class InMemoryRepository(Repository[T]):
    """
    Process-lifetime list seeded at construction.

    Data lives only as long as the repository instance; nothing is persisted.
    Ids are len(collection) + 1; nothing is ever removed, so they stay unique.
    """

    def __init__(self, name: str, seed: Iterable[T] = ()):
        self.name = name
        self._items: List[T] = list(seed)

    async def list(self) -> List[T]:
        return list(self._items)

    async def next_id(self) -> int:
        return len(self._items) + 1

    async def append(self, item: T) -> T:
        self._items.append(item)
        logger.info("Appended item to %s (size=%d)", self.name, len(self._items))
        return item

    def __len__(self) -> int:
        return len(self._items)
