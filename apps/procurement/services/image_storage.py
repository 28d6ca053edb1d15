"""
Image attachment storage for procurement request photos.

Two interchangeable backends implement ``ImageStorage``:

- ``LocalImageStorage`` keeps files under MEDIA_ROOT and returns a
  ``/uploads/<name>`` path served by the project URLconf.
- ``CloudinaryImageStorage`` uploads to Cloudinary, which resizes,
  compresses and converts the photo to WebP at upload time, and returns
  the hosted HTTPS URL.

Both validate the upload (image content type, size ceiling) before storing
anything. ``delete()`` is best-effort on both: failures are logged and
swallowed so deleting the owning request always succeeds.

Usage:
    storage = get_image_storage()
    image_path = storage.store(
        content=upload,
        original_name=upload.name,
        content_type=upload.content_type,
    )
    ...
    storage.delete(image_path)
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from django.conf import settings
from django.core.files.storage import FileSystemStorage

from .exceptions import (
    ImageStorageError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)

BACKEND_LOCAL = 'local'
BACKEND_CLOUDINARY = 'cloudinary'

CLOUDINARY_ALLOWED_FORMATS = ['jpg', 'jpeg', 'png', 'webp', 'heic', 'heif']
CLOUDINARY_TRANSFORMATION = [
    {'width': 1200, 'crop': 'limit', 'quality': 'auto:good', 'fetch_format': 'webp'},
]

_UNSAFE_NAME_CHARS = re.compile(r'[^A-Za-z0-9._-]')
_CLOUDINARY_VERSION_SEGMENT = re.compile(r'^v\d+/')


def sanitize_filename(original_name: str) -> str:
    """Replace characters outside alphanumerics, dot, dash and underscore."""
    name = Path(original_name or '').name
    return _UNSAFE_NAME_CHARS.sub('_', name) or 'image'


def build_image_name(original_name: str) -> str:
    """Collision-resistant name: epoch milliseconds plus the sanitized name."""
    return f"{int(time.time() * 1000)}-{sanitize_filename(original_name)}"


@dataclass(frozen=True)
class ImageStorageConfig:
    """Settings for an image storage backend."""

    backend: str = BACKEND_LOCAL
    max_bytes: int = 10 * 1024 * 1024
    upload_dir: str = 'uploads'
    upload_url: str = '/uploads/'
    cloud_name: str = ''
    api_key: str = ''
    api_secret: str = ''
    folder: str = 'procurement'
    timeout: int = 30

    @classmethod
    def from_settings(cls) -> 'ImageStorageConfig':
        return cls(
            backend=settings.IMAGE_STORAGE_BACKEND,
            max_bytes=settings.IMAGE_UPLOAD_MAX_BYTES,
            upload_dir=str(settings.MEDIA_ROOT),
            upload_url=settings.MEDIA_URL,
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
            timeout=settings.CLOUDINARY_TIMEOUT,
        )


class ImageStorage:
    """Base class for image attachment backends."""

    def __init__(self, config: ImageStorageConfig):
        self.config = config

    def store(self, *, content, original_name: str, content_type: str) -> str:
        """
        Validate and persist an uploaded image.

        Args:
            content: Django File (or file-like object with ``size``)
            original_name: Client-side file name
            content_type: MIME type reported by the client

        Returns:
            Path or URL the image can be fetched from over HTTP

        Raises:
            UnsupportedMediaTypeError: If content_type is not image/*
            PayloadTooLargeError: If the file exceeds the size ceiling
            ImageStorageError: If the backend fails
        """
        if not (content_type or '').startswith('image/'):
            raise UnsupportedMediaTypeError(
                'Only image files are allowed',
                errors={'image': [f"Unsupported content type '{content_type}'."]},
            )

        size = getattr(content, 'size', None)
        if size is not None and size > self.config.max_bytes:
            raise PayloadTooLargeError(
                f"Image exceeds the {self.config.max_bytes} byte limit",
                errors={'image': [f'File size {size} exceeds {self.config.max_bytes} bytes.']},
            )

        name = build_image_name(original_name)
        location = self._save(name, content, content_type)
        logger.info("Stored image %s as %s", original_name, location)
        return location

    def delete(self, path: str) -> None:
        """Remove a stored image. Never raises."""
        if not path:
            return
        try:
            self._delete(path)
        except Exception:
            logger.warning("Failed to delete image %s", path, exc_info=True)

    def _save(self, name: str, content, content_type: str) -> str:
        raise NotImplementedError

    def _delete(self, path: str) -> None:
        raise NotImplementedError


class LocalImageStorage(ImageStorage):
    """Stores images on the local filesystem under ``upload_dir``."""

    def __init__(self, config: ImageStorageConfig):
        super().__init__(config)
        self.storage = FileSystemStorage(
            location=config.upload_dir,
            base_url=config.upload_url,
        )

    def _save(self, name, content, content_type):
        try:
            saved_name = self.storage.save(name, content)
        except OSError as e:
            raise ImageStorageError(f"Could not write image: {e}") from e
        return self.storage.url(saved_name)

    def _delete(self, path):
        base_url = self.config.upload_url
        if not path.startswith(base_url):
            logger.warning("Image %s is not under %s, skipping delete", path, base_url)
            return
        name = path[len(base_url):]
        if not self.storage.exists(name):
            logger.warning("Image %s already missing", path)
            return
        self.storage.delete(name)
        logger.info("Deleted image %s", path)


class CloudinaryImageStorage(ImageStorage):
    """Uploads images to Cloudinary through the official SDK."""

    def _credentials(self) -> dict:
        return {
            'cloud_name': self.config.cloud_name,
            'api_key': self.config.api_key,
            'api_secret': self.config.api_secret,
            'timeout': self.config.timeout,
        }

    def public_id_from_url(self, url: str) -> Optional[str]:
        """
        Recover the public id from a delivery URL.

        https://res.cloudinary.com/<cloud>/image/upload/v17/procurement/17-a.webp
        -> procurement/17-a
        """
        _, marker, remainder = url.partition('/upload/')
        if not marker or not remainder:
            return None
        remainder = _CLOUDINARY_VERSION_SEGMENT.sub('', remainder)
        return remainder.rsplit('.', 1)[0]

    def _save(self, name, content, content_type):
        if hasattr(content, 'seek'):
            content.seek(0)

        try:
            result = cloudinary.uploader.upload(
                content,
                folder=self.config.folder,
                public_id=name.rsplit('.', 1)[0],
                allowed_formats=CLOUDINARY_ALLOWED_FORMATS,
                transformation=CLOUDINARY_TRANSFORMATION,
                **self._credentials()
            )
            return result['secure_url']
        except (CloudinaryError, OSError, KeyError) as e:
            raise ImageStorageError(f"Cloudinary upload failed: {e}") from e

    def _delete(self, path):
        public_id = self.public_id_from_url(path)
        if not public_id:
            logger.warning("Cannot derive Cloudinary public id from %s", path)
            return

        result = cloudinary.uploader.destroy(public_id, **self._credentials()).get('result')
        if result != 'ok':
            logger.warning("Cloudinary destroy for %s returned %s", public_id, result)
        else:
            logger.info("Deleted Cloudinary image %s", public_id)


BACKENDS = {
    BACKEND_LOCAL: LocalImageStorage,
    BACKEND_CLOUDINARY: CloudinaryImageStorage,
}


def get_image_storage(config: Optional[ImageStorageConfig] = None) -> ImageStorage:
    """Build the configured image storage backend."""
    config = config or ImageStorageConfig.from_settings()
    try:
        backend_class = BACKENDS[config.backend]
    except KeyError:
        raise ImageStorageError(f"Unknown image storage backend '{config.backend}'")
    return backend_class(config)
