"""Tests for the CreateProduct use case (synchronous handler)."""

import pytest

from shopcat.application.create_product import CreateProductHandler
from shopcat.domain.exceptions import (
    ImageProcessingFailed,
    PersistenceFailed,
    UploadFailed,
    UploadResponseMalformed,
    ValidationError,
)
from shopcat.domain.model.product import Product
from tests.fakes import FakeImageHost, FakeMaterializer, FakeProductStore


def _setup(link="https://i.imgur.com/abc123.jpg", materializer_fails=False):
    store = FakeProductStore()
    host = FakeImageHost(link=link)
    materializer = FakeMaterializer(fail=materializer_fails)
    handler = CreateProductHandler(store, host, materializer)
    return handler, store, host, materializer


def _draft() -> Product:
    return Product.create("Mug", "Ceramic", "12.50")


class TestCreateProductHappyPath:

    def test_persists_document_with_link(self):
        handler, store, _, _ = _setup()
        product_id = handler.handle(_draft(), "mug.jpg")

        assert store.documents[product_id] == {
            "name": "Mug",
            "description": "Ceramic",
            "price": "12.50",
            "imageUrl": "https://i.imgur.com/abc123.jpg",
        }

    def test_artifact_released_after_upload(self):
        handler, _, host, materializer = _setup()
        handler.handle(_draft(), "mug.jpg")
        assert materializer.acquired == 1
        assert materializer.released == 1
        assert len(host.uploads) == 1

    def test_rejects_already_persisted_product(self):
        handler, store, host, _ = _setup()
        persisted = Product.from_record({"id": "1", "name": "Mug", "price": 1})
        with pytest.raises(ValidationError, match="already persisted"):
            handler.handle(persisted, "mug.jpg")
        assert host.uploads == []
        assert store.calls == []


class TestCreateProductFailures:

    def test_image_processing_failure_short_circuits(self):
        handler, store, host, _ = _setup(materializer_fails=True)
        with pytest.raises(ImageProcessingFailed):
            handler.handle(_draft(), "missing.jpg")
        assert host.uploads == []
        assert store.calls == []

    def test_upload_failure_never_creates_document(self):
        handler, store, host, materializer = _setup()
        host.error = UploadFailed("503 Service Unavailable")

        with pytest.raises(UploadFailed, match="503"):
            handler.handle(_draft(), "mug.jpg")

        assert "create" not in store.call_names()
        assert materializer.released == 1

    def test_missing_link_is_malformed_response(self):
        handler, store, _, materializer = _setup(link=None)
        with pytest.raises(UploadResponseMalformed):
            handler.handle(_draft(), "mug.jpg")
        assert store.calls == []
        assert materializer.released == 1

    def test_store_failure_after_upload(self):
        handler, store, host, _ = _setup()
        store.fail_on.add("create")

        with pytest.raises(PersistenceFailed, match="create rejected"):
            handler.handle(_draft(), "mug.jpg")

        # The uploaded image is not rolled back.
        assert len(host.uploads) == 1
        assert store.documents == {}
