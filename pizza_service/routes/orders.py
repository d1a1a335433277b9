"""
Order Routes for JWT Pizza Service
==================================

Endpoints:
----------
- GET /api/order/menu: The menu (public)
- PUT /api/order/menu: Add a menu item (admin), returns the whole menu
- GET /api/order: The authenticated diner's orders, newest first
- POST /api/order: Place an order and send it to the factory

Order Placement:
----------------
The handler blocks on the factory. On success the factory's confirmation
token is returned as ``jwt`` together with its ``reportUrl``. If the factory
rejects the order or cannot be reached the response is
500 ``{"message": "Failed to fulfill order at factory"}`` with no ``jwt``.

The factory client is injected with ``Depends(get_factory_client)``.

Usage:
------
    POST /api/order
    {"franchiseId": 1, "storeId": 1,
     "items": [{"menuId": 1, "description": "Veggie", "price": 0.05}]}

    200 {"order": {...}, "jwt": "eyJpYXQ...", "reportUrl": "https://..."}
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..db import get_db
from ..factory_client import FactoryClient, get_factory_client
from ..models import User
from ..schemas.menu import MenuItemCreate, MenuItemOut
from ..schemas.orders import OrderCreate, OrderCreateResponse, OrderListResponse
from ..services import orders as order_service


order_router = APIRouter(prefix="/api/order", tags=["Orders"])


# =============================================================================
# Menu Endpoints
# =============================================================================

@order_router.get("/menu", response_model=List[MenuItemOut])
def get_menu(db: Session = Depends(get_db)) -> List[MenuItemOut]:
    return order_service.get_menu(db)


@order_router.put("/menu", response_model=List[MenuItemOut])
def add_menu_item(
    payload: MenuItemCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[MenuItemOut]:
    return order_service.add_menu_item(db, user, payload)


# =============================================================================
# Order Endpoints
# =============================================================================

@order_router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    orders, page = order_service.list_orders(db, user, page)
    return OrderListResponse(diner_id=user.id, orders=orders, page=page)


@order_router.post("", response_model=OrderCreateResponse)
def create_order(
    payload: OrderCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    factory: FactoryClient = Depends(get_factory_client),
) -> OrderCreateResponse:
    order, receipt = order_service.create_order(db, user, payload, factory)
    return OrderCreateResponse(order=order, jwt=receipt.jwt, report_url=receipt.report_url)
