"""Cart store: unique-by-id line items backed by a snapshot slot."""
from typing import List, Optional, Tuple

from storefront.errors import ERROR_INVALID_PRODUCT
from storefront.logging import get_logger

from .binding import CartListener
from .models import LineItem, decode_snapshot, encode_snapshot, parse_price
from .storage import SnapshotSlot

logger = get_logger(__name__)


class CartStore:
    """
    Holds one session's cart.

    Features:
    - Adding an id already in the cart bumps its quantity instead of adding a row
    - Every add rewrites the whole snapshot; clearing drops it
    - Listeners get ``on_cart_changed(total, emphasize)`` after each change;
      adds are emphasized, reloads are not

    One instance serves one session from a single event loop, so no locking.
    """

    def __init__(self, slot: SnapshotSlot, listeners: Optional[List[CartListener]] = None):
        self._slot = slot
        self._items: List[LineItem] = []
        self._listeners: List[CartListener] = list(listeners or [])

    @property
    def items(self) -> Tuple[LineItem, ...]:
        """Copies of the line items in first-add order."""
        return tuple(item.copy() for item in self._items)

    def subscribe(self, listener: CartListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CartListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def load(self) -> Tuple[LineItem, ...]:
        """Restore the last snapshot; a missing or unreadable one yields an empty cart."""
        self._items = await self._read_snapshot()
        self._notify(emphasize=False)
        return self.items

    async def add_or_increment(self, id: str, name: str, price, image: str) -> LineItem:
        """
        Add one unit of a product.

        The new contents are written first and only then become the cart, so a
        failed write leaves the store as it was.

        Raises:
            ValueError: empty product id
            InvalidPrice: price is not an integer (checked before any change)
        """
        if not id or not isinstance(id, str):
            raise ValueError(ERROR_INVALID_PRODUCT)
        parsed_price = parse_price(price)

        items = [item.copy() for item in self._items]
        item = next((candidate for candidate in items if candidate.id == id), None)
        if item is not None:
            item.quantity += 1
        else:
            item = LineItem(id=id, name=name, price=parsed_price, image=image, quantity=1)
            items.append(item)

        await self._persist(items)
        self._items = items
        self._notify(emphasize=True)
        return item.copy()

    async def clear(self) -> None:
        """Empty the cart and drop its snapshot."""
        try:
            await self._slot.clear()
        except Exception as e:
            logger.error(f"Failed to clear cart snapshot: {e}")
            raise
        self._items = []
        self._notify(emphasize=False)

    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    async def _read_snapshot(self) -> List[LineItem]:
        try:
            raw = await self._slot.read()
        except Exception as e:
            logger.warning(f"Failed to read cart snapshot, starting empty: {e}")
            return []

        if not raw:
            return []

        try:
            return decode_snapshot(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Corrupted cart snapshot, starting empty: {e}")
            return []

    async def _persist(self, items: List[LineItem]) -> None:
        try:
            await self._slot.write(encode_snapshot(items))
        except Exception as e:
            logger.error(f"Failed to persist cart snapshot: {e}")
            raise

    def _notify(self, emphasize: bool) -> None:
        total = self.total_quantity()
        for listener in list(self._listeners):
            listener.on_cart_changed(total, emphasize)


async def get_cart_store(slot: SnapshotSlot, listeners: Optional[List[CartListener]] = None) -> CartStore:
    """Build a store over ``slot`` and restore its snapshot."""
    store = CartStore(slot, listeners=listeners)
    await store.load()
    return store
