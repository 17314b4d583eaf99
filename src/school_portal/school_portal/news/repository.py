from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewsPost


class NewsRepository(Protocol):
    def create(self, *, title: str, content: str, department: str, image_url: Optional[str] = None) -> NewsPost:
        raise NotImplementedError

    def get_by_id(self, news_id: int) -> Optional[NewsPost]:
        raise NotImplementedError

    def list_recent(self, *, department: Optional[str] = None) -> Sequence[NewsPost]:
        """Newest first, optionally filtered by department."""

        raise NotImplementedError

    def delete_by_id(self, news_id: int) -> bool:
        raise NotImplementedError
