"""Tests for the scratch-directory image materializer."""

import io

import pytest

from shopcat.domain.exceptions import ImageProcessingFailed
from shopcat.infrastructure.files import ScratchDirMaterializer


class TestScratchDirMaterializer:

    def test_copies_file_and_releases_it(self, tmp_path):
        source = tmp_path / "photo.png"
        source.write_bytes(b"pixels")
        materializer = ScratchDirMaterializer(tmp_path / "cache")

        with materializer.materialize(source) as artifact:
            assert artifact.parent == tmp_path / "cache"
            assert artifact.name.startswith("temp_image_")
            assert artifact.suffix == ".jpg"
            assert artifact.read_bytes() == b"pixels"

        assert not artifact.exists()

    def test_accepts_string_path(self, tmp_path):
        source = tmp_path / "photo.png"
        source.write_bytes(b"pixels")
        with ScratchDirMaterializer(tmp_path).materialize(str(source)) as artifact:
            assert artifact.read_bytes() == b"pixels"

    def test_copies_stream(self, tmp_path):
        with ScratchDirMaterializer(tmp_path).materialize(io.BytesIO(b"stream")) as artifact:
            assert artifact.read_bytes() == b"stream"

    def test_concurrent_artifacts_do_not_collide(self, tmp_path):
        materializer = ScratchDirMaterializer(tmp_path)
        with materializer.materialize(io.BytesIO(b"a")) as first:
            with materializer.materialize(io.BytesIO(b"b")) as second:
                assert first != second
                assert first.read_bytes() == b"a"
                assert second.read_bytes() == b"b"

    def test_released_even_when_body_fails(self, tmp_path):
        materializer = ScratchDirMaterializer(tmp_path)
        with pytest.raises(RuntimeError):
            with materializer.materialize(io.BytesIO(b"x")) as artifact:
                raise RuntimeError("upload blew up")
        assert not artifact.exists()

    def test_missing_source(self, tmp_path):
        materializer = ScratchDirMaterializer(tmp_path / "cache")
        with pytest.raises(ImageProcessingFailed, match="Failed to process image"):
            with materializer.materialize(tmp_path / "nope.jpg"):
                pass
        assert list((tmp_path / "cache").iterdir()) == []
