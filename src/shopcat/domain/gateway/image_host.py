"""Abstract image host: turns a local image file into a durable link."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

# Multipart encoding expected by the host.
IMAGE_FIELD_NAME = "image"
IMAGE_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class ImageUpload:
    """What the host said about an accepted upload.

    ``link`` is None when the response did not carry one; deciding what
    that means is the caller's job.
    """

    link: str | None
    image_id: str | None = None


class ImageHostClient(ABC):

    @abstractmethod
    def upload(self, image_path: Path) -> ImageUpload:
        """Upload the file at ``image_path``.

        Raises UploadFailed on a non-success status or a transport error.
        """
