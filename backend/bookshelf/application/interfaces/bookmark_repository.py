"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from bookshelf.domain.entities import Bookmark


class BookmarkRepository(ABC):
    """Port for bookmark persistence — implemented in the infrastructure layer.

    The rating use cases only call ``get_by_id`` as an existence gate.
    """

    @abstractmethod
    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Retrieve a single bookmark by its ID."""
        ...

    @abstractmethod
    async def get_all(
        self, skip: int = 0, limit: int = 100, is_read: bool | None = None
    ) -> list[Bookmark]:
        """Retrieve a paginated list of bookmarks, newest first."""
        ...

    @abstractmethod
    async def create(self, bookmark: Bookmark) -> Bookmark:
        """Persist a new bookmark and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, bookmark: Bookmark) -> Bookmark:
        """Update an existing bookmark."""
        ...

    @abstractmethod
    async def delete(self, bookmark_id: int) -> bool:
        """Delete a bookmark. Returns True if deleted, False if not found."""
        ...
