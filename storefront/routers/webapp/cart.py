"""
WebApp Cart Router

Session cart endpoints. The frontend keeps an opaque session id and renders
the returned counter states as-is.
"""
from fastapi import APIRouter, Depends

from storefront.cart import CartStore, CounterBinding, RedisSnapshotSlot, SnapshotSlot, get_cart_store
from storefront.errors import InvalidArgument
from storefront.logging import get_logger, sanitize_id_for_logging
from .models import AddToCartRequest

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-cart"])


def get_cart_slot(session_id: str) -> SnapshotSlot:
    """Snapshot slot for a cart session."""
    return RedisSnapshotSlot(session_id)


async def _open_cart(slot: SnapshotSlot) -> tuple[CartStore, CounterBinding]:
    binding = CounterBinding.for_counters()
    store = await get_cart_store(slot, listeners=[binding])
    return store, binding


def _format_cart_response(store: CartStore, binding: CounterBinding) -> dict:
    return {
        "items": [item.to_dict() for item in store.items],
        "total_quantity": store.total_quantity(),
        "counters": binding.to_dict(),
    }


@router.get("/cart/{session_id}")
async def get_cart(session_id: str, slot: SnapshotSlot = Depends(get_cart_slot)):
    """Restore the session's cart"""
    store, binding = await _open_cart(slot)
    return _format_cart_response(store, binding)


@router.post("/cart/{session_id}/items")
async def add_to_cart(
    session_id: str,
    request: AddToCartRequest,
    slot: SnapshotSlot = Depends(get_cart_slot),
):
    """Add one unit of a product"""
    store, binding = await _open_cart(slot)
    try:
        await store.add_or_increment(request.id, request.name, request.price, request.image)
    except ValueError as e:
        raise InvalidArgument(str(e)) from e

    logger.info(
        f"Cart {sanitize_id_for_logging(session_id)}: +{sanitize_id_for_logging(request.id)}, "
        f"total={store.total_quantity()}"
    )
    return _format_cart_response(store, binding)


@router.delete("/cart/{session_id}")
async def clear_cart(session_id: str, slot: SnapshotSlot = Depends(get_cart_slot)):
    """Empty the session's cart"""
    store, binding = await _open_cart(slot)
    await store.clear()
    return _format_cart_response(store, binding)
