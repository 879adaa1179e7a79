"""Abstract materializer: user-selected image -> local upload artifact."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path
from typing import BinaryIO, Union

# A path on disk or an already-open binary stream (e.g. an upload widget's file).
ImageResource = Union[str, Path, BinaryIO]


class ImageMaterializer(ABC):

    @abstractmethod
    def materialize(self, resource: ImageResource) -> AbstractContextManager[Path]:
        """Copy ``resource`` into a scratch file owned by one upload.

        Entering the context raises ImageProcessingFailed when the copy
        fails; leaving it deletes the file, whatever happened inside.
        """
