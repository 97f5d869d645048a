"""Domain entity for a saved bookmark (the article a rating attaches to)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Bookmark:
    """A saved article URL with its read state."""

    url: str
    title: str | None = None
    is_read: bool = False
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def set_read(self, is_read: bool) -> None:
        """Flip the read flag and refresh the updated_at timestamp."""
        self.is_read = is_read
        self.updated_at = datetime.now(timezone.utc)
