from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Protocol

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.exceptions import ValidationError

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


class ImageStore(Protocol):
    def save(self, image: FileStorage) -> str:
        """Persist the upload and return its public URL."""

        raise NotImplementedError


class LocalImageStore(ImageStore):
    """Stores uploads on disk; files are served back under ``url_prefix``."""

    def __init__(self, folder: str | Path, *, url_prefix: str = "/uploads"):
        self._folder = Path(folder)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def folder(self) -> Path:
        return self._folder

    @staticmethod
    def build_filename(original: Optional[str], *, now_ms: Optional[int] = None) -> str:
        name = secure_filename(original or "")
        if not name:
            name = "image.jpg"

        ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            raise ValidationError("Only image uploads are allowed", code="invalid-image")

        stamp = now_ms if now_ms is not None else int(time.time() * 1000)
        return f"{stamp}-{name}"

    def save(self, image: FileStorage) -> str:
        filename = self.build_filename(image.filename)
        self._folder.mkdir(parents=True, exist_ok=True)
        image.save(str(self._folder / filename))
        return f"{self._url_prefix}/{filename}"
