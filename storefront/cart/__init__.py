"""Cart package: models, snapshot slots, view binding and the store."""
from .binding import CartListener, CounterBinding, CounterState
from .models import InvalidPrice, LineItem, parse_price
from .service import CartStore, get_cart_store
from .storage import MemorySnapshotSlot, RedisSnapshotSlot, SnapshotSlot

__all__ = [
    "CartListener",
    "CartStore",
    "CounterBinding",
    "CounterState",
    "InvalidPrice",
    "LineItem",
    "MemorySnapshotSlot",
    "RedisSnapshotSlot",
    "SnapshotSlot",
    "get_cart_store",
    "parse_price",
]
