"""Application service: Create Product use case.

Steps, strictly in this order:

1. Materialize the selected image into a local upload artifact.
2. Upload the artifact to the image host.
3. Take the durable link from the upload result.
4. Create the product document with the draft's fields plus the link.

The artifact is released as soon as step 2 finishes, whether the upload
worked or not.  Nothing is rolled back: if step 4 fails, the image
already uploaded in step 2 stays on the host.
"""

from __future__ import annotations

import logging

from shopcat.domain.exceptions import UploadResponseMalformed, ValidationError
from shopcat.domain.gateway.image_host import ImageHostClient
from shopcat.domain.gateway.image_source import ImageMaterializer, ImageResource
from shopcat.domain.model.product import Product
from shopcat.domain.repository.product_store import AuthoritativeStore

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(
        self,
        store: AuthoritativeStore,
        image_host: ImageHostClient,
        materializer: ImageMaterializer,
    ) -> None:
        self._store = store
        self._image_host = image_host
        self._materializer = materializer

    def handle(self, draft: Product, image: ImageResource) -> str:
        """Persist ``draft`` with an uploaded image; return the new id."""
        if not draft.is_draft:
            raise ValidationError(f"Product '{draft.id}' is already persisted")

        with self._materializer.materialize(image) as artifact:
            upload = self._image_host.upload(artifact)

        if not upload.link:
            raise UploadResponseMalformed()
        logger.info("Uploaded image for '%s': %s", draft.name, upload.link)

        product_id = self._store.create(draft.to_document(image_url=upload.link))
        logger.info("Created product %s '%s'", product_id, draft.name)
        return product_id
