"""CartLedger: the user's in-memory selection of catalog items.

Never persisted remotely.  The subtotal is derived on every read so it
can't drift from the members.
"""

from __future__ import annotations

from shopcat.domain.exceptions import ValidationError
from shopcat.domain.model.product import Product
from shopcat.domain.model.value_objects import Money


class CartLedger:

    def __init__(self) -> None:
        self._items: dict[str, Product] = {}

    def add(self, product: Product) -> None:
        """Add a product; adding one that is already present changes nothing."""
        if product.is_draft:
            raise ValidationError("Only persisted products can be added to the cart")
        self._items.setdefault(product.id, product)

    def remove(self, product_id: str) -> None:
        """Remove by id; a no-op when the id is absent."""
        self._items.pop(product_id, None)

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> tuple[Product, ...]:
        return tuple(self._items.values())

    def subtotal(self) -> Money:
        result = Money.zero()
        for product in self._items.values():
            result = result + product.price
        return result

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    def __len__(self) -> int:
        return len(self._items)
