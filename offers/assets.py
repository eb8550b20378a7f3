"""
offers/assets.py

Asset Store for offer thumbnails and PDFs.

Files live in a flat directory (settings.OFFERS_UPLOAD_DIR) and are addressed
by the public path returned from `store()`, e.g. "/uploads/1718000000000_promo.pdf".
That same path is what the offer record keeps and what clients GET later.

Checks are limited to the declared MIME type (allow-list) and the size ceiling.
Bytes are not sniffed: a PNG declared as application/pdf is accepted as a PDF.
"""
import logging
import os
import re
from dataclasses import dataclass

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import ContentFile, File
from django.core.files.storage import FileSystemStorage
from django.utils import timezone

from .errors import PayloadTooLargeError, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/gif",
})

MAX_ASSET_BYTES = 15 * 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class StoredAsset:
    path: str
    mime_type: str
    original_name: str


class AssetStore:
    def __init__(self, location, url_prefix: str = "/uploads/", max_bytes: int = MAX_ASSET_BYTES, clock=None):
        self.url_prefix = "/" + url_prefix.strip("/") + "/"
        self.max_bytes = max_bytes
        self._clock = clock or timezone.now
        self._storage = FileSystemStorage(location=location, base_url=self.url_prefix)

    @property
    def location(self) -> str:
        return self._storage.location

    def filename_for(self, original_name: str) -> str:
        """<epoch millis>_<sanitized basename><ext>, e.g. 1718000000000_Summer_sale.pdf"""
        basename = os.path.basename((original_name or "").replace("\\", "/")) or "file"
        stem, ext = os.path.splitext(basename)
        base = _UNSAFE_CHARS.sub("_", stem) or "file"
        ext_chars = re.sub(r"[^A-Za-z0-9]", "", ext[1:])
        ext = f".{ext_chars}" if ext_chars else ""
        stamp = int(self._clock().timestamp() * 1000)
        return f"{stamp}_{base}{ext}"

    def store(self, content, declared_mime_type: str, original_name: str) -> StoredAsset:
        if declared_mime_type not in ALLOWED_MIME_TYPES:
            raise UnsupportedMediaTypeError("Unsupported file type.")

        if isinstance(content, (bytes, bytearray)):
            content = ContentFile(bytes(content))
        elif not isinstance(content, File):
            content = File(content)

        if content.size > self.max_bytes:
            raise PayloadTooLargeError("File too large.")

        # FileSystemStorage appends a random suffix if the name is already taken.
        name = self._storage.save(self.filename_for(original_name), content)
        path = self.url_prefix + name
        logger.info("Stored asset %s (%s, %d bytes)", path, declared_mime_type, content.size)
        return StoredAsset(path=path, mime_type=declared_mime_type, original_name=original_name)

    def remove(self, path: str) -> bool:
        """
        Delete the file behind `path`. A missing file is fine. Paths that are not
        under this store's prefix are ignored and reported as False.
        """
        if not path or not path.startswith(self.url_prefix):
            return False
        name = path[len(self.url_prefix):]
        if not name:
            return False
        try:
            self._storage.delete(name)
        except SuspiciousFileOperation:
            logger.warning("Refusing to delete asset outside upload dir: %s", path)
            return False
        return True

    def exists(self, path: str) -> bool:
        if not path or not path.startswith(self.url_prefix) or path == self.url_prefix:
            return False
        try:
            return self._storage.exists(path[len(self.url_prefix):])
        except SuspiciousFileOperation:
            return False
