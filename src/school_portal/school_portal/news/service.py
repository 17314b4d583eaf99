from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.datastructures import FileStorage

from ..access.policy import Caller, PrincipalCaller, StaffCaller, require_staff
from ..common.validators import require_non_empty
from ..core.constants import COMMON_NEWS_DEPARTMENT
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import NewsPost
from .repository import NewsRepository
from .storage import ImageStore

logger = logging.getLogger(__name__)


class NewsService:
    """Departmental news feed.

    Principal posts land in the common ``News`` bucket, staff posts in their
    own department. The principal may delete any post.
    """

    def __init__(self, news: NewsRepository, images: Optional[ImageStore] = None):
        self._news = news
        self._images = images

    def list_public(self, *, department: Optional[str] = None) -> Sequence[NewsPost]:
        return self._news.list_recent(department=(department or "").strip() or None)

    def list_own(self, caller: Caller) -> Sequence[NewsPost]:
        caller = require_staff(caller)
        return self._news.list_recent(department=caller.department)

    def create(
        self,
        caller: Caller,
        *,
        title: str,
        content: str,
        image: Optional[FileStorage] = None,
    ) -> NewsPost:
        title = require_non_empty(title, "title")
        content = require_non_empty(content, "content")

        if isinstance(caller, StaffCaller):
            department = require_staff(caller).department
        else:
            department = COMMON_NEWS_DEPARTMENT

        image_url = None
        if image is not None and image.filename:
            if self._images is None:
                raise RuntimeError("No image store configured")
            image_url = self._images.save(image)

        post = self._news.create(title=title, content=content, department=department, image_url=image_url)
        logger.info("News %s posted to %s by user %s", post.news_id, department, caller.user_id)
        return post

    def delete(self, caller: Caller, news_id: int) -> None:
        post = self._news.get_by_id(int(news_id))
        if not post:
            raise NotFoundError("News not found", code="news-not-found")

        if not isinstance(caller, PrincipalCaller):
            caller = require_staff(caller)
            if post.department != caller.department:
                raise AuthorizationError("cross-department", "Cannot delete other department posts")

        self._news.delete_by_id(post.news_id)
        logger.info("News %s deleted by user %s", post.news_id, caller.user_id)
