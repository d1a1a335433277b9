"""
Order Schemas for JWT Pizza Service
===================================

Order Lifecycle:
----------------
1. **created**: persisted, not yet sent to the factory
2. **fulfilled**: the factory accepted it; ``jwt`` and ``reportUrl`` are set
3. **failed**: the factory rejected it or could not be reached

There is no retry: a failed order stays failed.

Usage:
------
    POST /api/order
    {
        "franchiseId": 1,
        "storeId": 1,
        "items": [{"menuId": 1, "description": "Veggie", "price": 0.05}]
    }
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class OrderItemIn(CamelModel):
    menu_id: int
    description: str
    price: float = Field(ge=0)


class OrderItemOut(CamelModel):
    id: int
    menu_id: int
    description: str
    price: float


class OrderCreate(CamelModel):
    franchise_id: int
    store_id: int
    items: List[OrderItemIn] = Field(min_length=1)


class OrderOut(CamelModel):
    id: int
    franchise_id: int
    store_id: int
    date: Optional[datetime] = None
    status: str
    items: List[OrderItemOut] = []


class OrderListResponse(CamelModel):
    diner_id: int
    orders: List[OrderOut]
    page: int


class OrderCreateResponse(CamelModel):
    order: OrderOut
    jwt: str
    report_url: Optional[str] = None
