"""Application service: Delete Product use case."""

from __future__ import annotations

from shopcat.domain.exceptions import ValidationError
from shopcat.domain.repository.product_store import AuthoritativeStore


class DeleteProductHandler:

    def __init__(self, store: AuthoritativeStore) -> None:
        self._store = store

    def handle(self, product_id: str) -> None:
        """Delete the stored document.

        The cache is not touched: the product disappears from it with the
        next feed snapshot.
        """
        if not product_id:
            raise ValidationError("Product id is required")
        self._store.delete(product_id)
