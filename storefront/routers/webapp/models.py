"""
WebApp API Pydantic Models
"""
from typing import Any

from pydantic import BaseModel


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    id: str
    name: str
    # Product cards carry the price as a data attribute string. Left untyped so
    # parse_price alone decides; pydantic would turn true into 1
    price: Any
    image: str = ""
