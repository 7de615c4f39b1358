"""Image asset management on top of the object storage bucket."""

import logging
import secrets
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from makeup_studio.config import DEFAULT_MAX_UPLOAD_BYTES
from makeup_studio.domain.forms import UploadedFile
from makeup_studio.errors import UploadError

logger = logging.getLogger(__name__)

ABOUT_FOLDER = "about"
GALLERY_FOLDER = "gallery"


class AssetStore(Protocol):
    """Storage bucket operations."""

    def upload(self, content: bytes, path: str, content_type: str) -> str:
        """Store bytes at a path and return the stored path."""

    def get_public_url(self, path: str) -> str:
        """Return the public URL of a stored path."""

    def remove(self, paths: list[str]) -> None:
        """Delete stored objects."""


def build_object_path(
    folder: str,
    file: UploadedFile,
    now: datetime | None = None,
    token: str | None = None,
) -> str:
    """Return a unique object path like ``about/1714500000000-9f2c.jpg``."""
    moment = now or datetime.now(tz=UTC)
    suffix = token or secrets.token_hex(6)
    return f"{folder}/{int(moment.timestamp() * 1000)}-{suffix}.{_extension(file)}"


def _extension(file: UploadedFile) -> str:
    _, dot, ext = file.filename.rpartition(".")
    if dot and ext:
        return ext.lower()
    _, _, subtype = file.content_type.partition("/")
    return subtype.split("+")[0].lower() or "bin"


@dataclass
class AssetService:
    """Upload, resolve and clean up image objects."""

    store: AssetStore
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def upload(self, file: UploadedFile, destination_path: str) -> str:
        """Validate and upload a file, returning its stored path."""
        if not file.content_type.startswith("image/"):
            raise UploadError(
                f"Unsupported file type {file.content_type or 'unknown'}; "
                "please choose an image."
            )
        self.check_size(file.size)
        try:
            stored_path = self.store.upload(
                file.content, destination_path, file.content_type
            )
        except Exception as exc:
            logger.exception("Asset upload failed", extra={"path": destination_path})
            raise UploadError(f"Upload failed: {exc}") from exc
        logger.info("Uploaded asset %s", stored_path)
        return stored_path

    def check_size(self, size: int) -> None:
        """Reject uploads over the configured limit."""
        if size > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise UploadError(f"Image is larger than {limit_mb}MB.", too_large=True)

    def upload_to_folder(self, file: UploadedFile, folder: str) -> str:
        """Upload a file under a freshly generated path in ``folder``."""
        return self.upload(file, build_object_path(folder, file))

    def get_public_url(self, stored_path: str) -> str:
        """Return the public URL for a stored path."""
        return self.store.get_public_url(stored_path)

    def remove(self, stored_paths: Iterable[str | None]) -> None:
        """Delete stored objects, logging and swallowing any failure."""
        paths = [path for path in stored_paths if path]
        if not paths:
            return
        try:
            self.store.remove(paths)
        except Exception:
            logger.warning("Failed to remove stored assets %s", paths, exc_info=True)
            return
        logger.info("Removed stored assets %s", paths)
