"""Local materialization of user-selected images."""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from shopcat.domain.exceptions import ImageProcessingFailed
from shopcat.domain.gateway.image_source import ImageMaterializer, ImageResource

logger = logging.getLogger(__name__)


class ScratchDirMaterializer(ImageMaterializer):
    """Copies each image into its own ``temp_image_*.jpg`` under ``cache_dir``.

    One file per upload: background workers may run several creates at
    once, and they must not overwrite each other's artifact.
    """

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = cache_dir

    @contextmanager
    def materialize(self, resource: ImageResource) -> Iterator[Path]:
        artifact = self._copy(resource)
        try:
            yield artifact
        finally:
            artifact.unlink(missing_ok=True)
            logger.debug("Released upload artifact %s", artifact)

    def _copy(self, resource: ImageResource) -> Path:
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                prefix="temp_image_", suffix=".jpg", dir=self._cache_dir, delete=False
            ) as output:
                artifact = Path(output.name)
                try:
                    if isinstance(resource, (str, Path)):
                        with open(resource, "rb") as source:
                            shutil.copyfileobj(source, output)
                    else:
                        shutil.copyfileobj(resource, output)
                except BaseException:
                    output.close()
                    artifact.unlink(missing_ok=True)
                    raise
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Error processing image: %s", exc)
            raise ImageProcessingFailed() from exc
        return artifact
