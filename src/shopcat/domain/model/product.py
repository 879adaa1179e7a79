"""Product aggregate.

A Product is either a *draft* (no id yet, built from presentation input)
or *persisted* (id assigned by the authoritative store).  The catalog
cache only ever holds persisted products.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from shopcat.domain.exceptions import ValidationError
from shopcat.domain.model.value_objects import Money

# Wire names of the document fields, in payload order.
FIELD_NAME = "name"
FIELD_DESCRIPTION = "description"
FIELD_PRICE = "price"
FIELD_IMAGE_URL = "imageUrl"

DOCUMENT_FIELDS = (FIELD_NAME, FIELD_DESCRIPTION, FIELD_PRICE, FIELD_IMAGE_URL)


@dataclass(frozen=True)
class Product:
    """A catalog entry.

    Frozen: the cache hands the same instances to every reader, so a
    change to a product is always a new snapshot, never an in-place edit.
    """

    id: str
    name: str
    description: str
    price: Money
    image_url: str = ""

    @property
    def is_draft(self) -> bool:
        return not self.id

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str,
        price: str | float | int | Money,
    ) -> Product:
        """Build a draft from user input, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(price, Money):
            price = Money.of(price)
        return Product(
            id="",
            name=name.strip(),
            description=(description or "").strip(),
            price=price,
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def from_record(record: Mapping[str, Any]) -> Product:
        """Decode a raw feed record into a persisted Product.

        Raises ValidationError for anything the cache should drop.
        """
        if not isinstance(record, Mapping):
            raise ValidationError(f"Record must be a mapping, got {type(record).__name__}")

        product_id = record.get("id")
        if not isinstance(product_id, str) or not product_id:
            raise ValidationError("Record has no id")

        name = record.get(FIELD_NAME)
        if not isinstance(name, str):
            raise ValidationError(f"Record {product_id} has no name")

        description = record.get(FIELD_DESCRIPTION, "")
        image_url = record.get(FIELD_IMAGE_URL, "")
        if not isinstance(description, str) or not isinstance(image_url, str):
            raise ValidationError(f"Record {product_id} has non-text fields")

        if FIELD_PRICE not in record:
            raise ValidationError(f"Record {product_id} has no price")

        return Product(
            id=product_id,
            name=name,
            description=description,
            price=Money.of(record[FIELD_PRICE]),
            image_url=image_url,
        )

    def to_document(self, image_url: str | None = None) -> dict[str, str]:
        """Compose the store payload; ``image_url`` overrides the current link."""
        return {
            FIELD_NAME: self.name,
            FIELD_DESCRIPTION: self.description,
            FIELD_PRICE: str(self.price.amount),
            FIELD_IMAGE_URL: self.image_url if image_url is None else image_url,
        }
