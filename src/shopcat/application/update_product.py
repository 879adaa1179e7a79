"""Application service: Update Product use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from shopcat.domain.exceptions import ValidationError
from shopcat.domain.model.product import (
    DOCUMENT_FIELDS,
    FIELD_DESCRIPTION,
    FIELD_NAME,
    FIELD_PRICE,
)
from shopcat.domain.model.value_objects import Money
from shopcat.domain.repository.product_store import AuthoritativeStore


class UpdateProductHandler:

    def __init__(self, store: AuthoritativeStore) -> None:
        self._store = store

    def handle(self, product_id: str, fields: Mapping[str, Any]) -> None:
        """Merge a subset of fields into a stored product.

        Fields not named in ``fields`` keep their stored values.
        """
        if not product_id:
            raise ValidationError("Product id is required")
        self._store.update(product_id, self.normalize(fields))

    @staticmethod
    def normalize(fields: Mapping[str, Any]) -> dict[str, str]:
        if not fields:
            raise ValidationError("Nothing to update")

        unknown = sorted(set(fields) - set(DOCUMENT_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(unknown)}")

        normalized: dict[str, str] = {}
        for name, value in fields.items():
            if name == FIELD_PRICE:
                normalized[name] = str(Money.of(value).amount)
            elif not isinstance(value, str):
                raise ValidationError(f"Field '{name}' must be text")
            elif name == FIELD_NAME:
                if not value.strip():
                    raise ValidationError("Product name is required")
                normalized[name] = value.strip()
            elif name == FIELD_DESCRIPTION:
                normalized[name] = value.strip()
            else:
                normalized[name] = value
        return normalized
