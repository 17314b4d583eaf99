from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp


@dataclass(frozen=True)
class NewsPost:
    news_id: int
    title: str
    content: str
    department: str
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.news_id,
            "title": self.title,
            "content": self.content,
            "dept": self.department,
            "imageUrl": self.image_url,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }
