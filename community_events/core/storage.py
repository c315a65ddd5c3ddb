"""
Local-disk storage for uploaded event images.

Images are written below ``root/images_dir`` under a generated unique name
and referenced everywhere else by their path relative to ``root`` (for
example ``uploads/events/3f2a...c1.png``). The same relative path is what the
static mount serves, so clients resolve it against the server base URL.

Deletion is best-effort: a missing file is ignored and an OS failure is
logged, never raised.
"""

from pathlib import Path, PurePosixPath
from uuid import uuid4

import structlog
from fastapi import UploadFile

from community_events.core.exceptions import ValidationError

logger = structlog.get_logger(__name__)

__all__ = ["ImageStorage"]


class ImageStorage:
    """Save and remove event images on the local filesystem."""

    def __init__(
        self,
        root: Path | str,
        images_dir: str = "uploads/events",
        max_bytes: int = 5 * 1024 * 1024,
    ) -> None:
        self.root = Path(root).resolve()
        self.images_dir = PurePosixPath(images_dir)
        self.max_bytes = max_bytes

    @property
    def directory(self) -> Path:
        return self.root / self.images_dir

    @staticmethod
    def is_provided(upload: UploadFile | None) -> bool:
        """Browsers send an empty file part when no file was picked."""
        return upload is not None and bool(upload.filename)

    async def save(self, upload: UploadFile | None) -> str:
        """Write an uploaded image and return its relative path.

        Raises:
            ValidationError: No file, not an image, or too large
        """
        if not self.is_provided(upload):
            raise ValidationError(message="Event image is required")

        if upload.content_type and not upload.content_type.startswith("image/"):
            raise ValidationError(
                message="Event image must be an image file",
                detail={"content_type": upload.content_type},
            )

        # One byte past the limit is enough to tell an oversized upload
        data = await upload.read(self.max_bytes + 1)
        if not data:
            raise ValidationError(message="Event image is empty")
        if len(data) > self.max_bytes:
            raise ValidationError(
                message=f"Event image exceeds {self.max_bytes} bytes",
                detail={"max_bytes": self.max_bytes},
            )

        suffix = Path(upload.filename).suffix.lower()
        filename = f"{uuid4().hex}{suffix}"
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(data)

        relative_path = (self.images_dir / filename).as_posix()
        logger.info("image_saved", path=relative_path, size=len(data))
        return relative_path

    def resolve(self, relative_path: str) -> Path:
        """Absolute path for a stored relative path; must stay below root."""
        path = (self.root / relative_path).resolve()
        if not path.is_relative_to(self.root):
            raise ValueError(f"Image path escapes storage root: {relative_path}")
        return path

    def delete(self, relative_path: str | None) -> None:
        """Remove a stored image, logging instead of raising on failure."""
        if not relative_path:
            return
        try:
            self._remove(self.resolve(relative_path))
        except (OSError, ValueError) as exc:
            logger.warning("image_delete_failed", path=relative_path, error=str(exc))
        else:
            logger.info("image_deleted", path=relative_path)

    def _remove(self, path: Path) -> None:
        path.unlink(missing_ok=True)
