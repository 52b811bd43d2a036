"""Cart models: line items and their snapshot encoding."""
import json
import re
from dataclasses import dataclass, replace
from typing import Any, List

from storefront.errors import ERROR_INVALID_PRICE

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class InvalidPrice(ValueError):
    """Raised when a price attribute is not an integer."""


@dataclass
class LineItem:
    """One product in the cart with its accumulated quantity.

    ``name``, ``price`` and ``image`` are captured when the product is first
    added and are not refreshed by later adds.
    """
    id: str
    name: str
    price: int
    image: str
    quantity: int = 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a snapshot record. Raises on any malformed field."""
        quantity = data["quantity"]
        if not _is_int(quantity) or quantity < 1:
            raise ValueError(f"invalid quantity: {quantity!r}")
        price = data["price"]
        if not _is_int(price):
            raise ValueError(f"invalid price: {price!r}")
        item_id = data["id"]
        if not isinstance(item_id, str) or not item_id:
            raise ValueError(f"invalid id: {item_id!r}")
        return cls(
            id=item_id,
            name=str(data["name"]),
            price=price,
            image=str(data["image"]),
            quantity=quantity,
        )

    def copy(self) -> "LineItem":
        return replace(self)


def parse_price(raw: Any) -> int:
    """
    Parse a product price attribute.

    Accepts ints and base-10 integer strings (surrounding whitespace allowed).
    Floats, booleans, empty strings and anything else raise InvalidPrice.
    """
    if _is_int(raw):
        return raw
    if isinstance(raw, str):
        candidate = raw.strip()
        if _INTEGER_PATTERN.fullmatch(candidate):
            return int(candidate)
    raise InvalidPrice(f"{ERROR_INVALID_PRICE}: {raw!r}")


def encode_snapshot(items: List[LineItem]) -> str:
    """Serialize line items in cart order."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def decode_snapshot(raw: str | bytes) -> List[LineItem]:
    """
    Deserialize a snapshot.

    Raises ValueError/KeyError/TypeError on malformed input, including
    duplicate ids, so callers can treat any of them as "no usable snapshot".
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError("snapshot must be a list of line items")

    items = [LineItem.from_dict(record) for record in data]
    ids = [item.id for item in items]
    if len(ids) != len(set(ids)):
        raise ValueError("snapshot contains duplicate line item ids")
    return items


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
