"""Object storage for uploaded and generated files.

Services depend on FileStore; DjangoFileStore writes through Django's
default storage backend and returns public URLs.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image

from core.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

# Pillow format name -> the only content type accepted for it
IMAGE_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


class InvalidImageError(DomainError):
    """Raised when an uploaded image is the wrong type or too large."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_IMAGE, message=message)


@dataclass(frozen=True)
class Upload:
    """An uploaded file, detached from the HTTP layer."""

    name: str
    content_type: str
    content: bytes

    @classmethod
    def from_file(cls, uploaded) -> "Upload":
        """Build from a Django UploadedFile."""
        return cls(
            name=uploaded.name or "",
            content_type=uploaded.content_type or "",
            content=uploaded.read(),
        )

    @property
    def size(self) -> int:
        return len(self.content)


def image_extension(upload: Upload, max_bytes: int) -> str:
    """Return the file extension for a valid image upload.

    The extension comes from the content type, never from the client's
    file name, and the bytes must decode as that image format.

    Raises:
        InvalidImageError: If the content type is not a supported image,
            the file exceeds max_bytes, or the content is not that image.
    """
    content_type = upload.content_type.lower()
    extension = IMAGE_EXTENSIONS.get(content_type)
    if extension is None:
        raise InvalidImageError("Please upload a JPEG, PNG, GIF or WebP image")
    if upload.size > max_bytes:
        raise InvalidImageError(f"Image must be less than {max_bytes // (1024 * 1024)}MB")
    try:
        with Image.open(BytesIO(upload.content)) as image:
            detected = image.format
            image.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        raise InvalidImageError("Please upload a valid image file") from None
    if IMAGE_FORMATS.get(detected) != content_type:
        raise InvalidImageError("Image content does not match its type")
    return extension


class FileStore(ABC):
    """Interface for object storage."""

    @abstractmethod
    def save(self, path: str, content: bytes, overwrite: bool = True) -> str:
        """Store content at path and return its public URL."""
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the object at path if it exists."""
        ...


class DjangoFileStore(FileStore):
    """FileStore backed by Django's default storage."""

    def save(self, path: str, content: bytes, overwrite: bool = True) -> str:
        if overwrite and default_storage.exists(path):
            default_storage.delete(path)
        stored_path = default_storage.save(path, ContentFile(content))
        logger.debug("Stored %s (%d bytes)", stored_path, len(content))
        return default_storage.url(stored_path)

    def delete(self, path: str) -> None:
        if default_storage.exists(path):
            default_storage.delete(path)
