"""
Order Service for JWT Pizza Service
===================================

Menu management, order history, and order placement.

Order Placement:
----------------
``create_order`` runs in three steps:

1. Validate the store belongs to the franchise and every item references a
   menu entry. Nothing is written if validation fails.
2. Persist the order with status ``created``.
3. Send the order to the factory (one blocking call, no retry):
   - accepted: status becomes ``fulfilled`` and the factory's ``jwt`` and
     ``reportUrl`` are stored on the order.
   - anything else (rejected, unreachable, client error): status becomes
     ``failed`` and ``FulfillmentError`` propagates to the caller (HTTP 500).

Failed orders are kept so the diner's history shows what was attempted.
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from .. import config
from ..exceptions import AuthorizationError, FulfillmentError, NotFoundError, ValidationError
from ..factory_client import FactoryClient, FactoryReceipt
from ..models import MenuItem, Order, OrderItem, Store, User
from ..roles import is_admin
from ..schemas.menu import MenuItemCreate, MenuItemOut
from ..schemas.orders import OrderCreate, OrderOut


logger = logging.getLogger(__name__)

STATUS_CREATED = "created"
STATUS_FULFILLED = "fulfilled"
STATUS_FAILED = "failed"


# =============================================================================
# Menu
# =============================================================================

def get_menu(db: Session) -> List[MenuItemOut]:
    items = db.query(MenuItem).order_by(MenuItem.id.asc()).all()
    return [MenuItemOut.model_validate(m) for m in items]


def add_menu_item(db: Session, actor: User, payload: MenuItemCreate) -> List[MenuItemOut]:
    """Add an item and return the whole menu. Admins only."""
    if not is_admin(actor.grants):
        raise AuthorizationError("unable to add menu item")

    item = MenuItem(
        title=payload.title,
        description=payload.description,
        image=payload.image,
        price=payload.price,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created menu item: %s (id=%d)", item.title, item.id)
    return get_menu(db)


# =============================================================================
# Orders
# =============================================================================

def list_orders(db: Session, user: User, page: int = 1) -> Tuple[List[OrderOut], int]:
    """One page of the user's orders, newest first. Pages start at 1."""
    page = max(page, 1)
    orders = (
        db.query(Order)
        .filter(Order.user_id == user.id)
        .order_by(Order.date.desc(), Order.id.desc())
        .offset((page - 1) * config.ORDER_PAGE_SIZE)
        .limit(config.ORDER_PAGE_SIZE)
        .all()
    )
    return [OrderOut.model_validate(o) for o in orders], page


def _validate_order(db: Session, payload: OrderCreate) -> None:
    store = (
        db.query(Store)
        .filter(Store.id == payload.store_id, Store.franchise_id == payload.franchise_id)
        .first()
    )
    if store is None:
        raise NotFoundError("store not found")

    menu_ids = {item.menu_id for item in payload.items}
    known = {
        row.id
        for row in db.query(MenuItem.id).filter(MenuItem.id.in_(menu_ids)).all()
    }
    missing = sorted(menu_ids - known)
    if missing:
        raise ValidationError(f"unknown menu item {missing[0]}")


def _mark_failed(db: Session, order: Order, report_url) -> None:
    order.status = STATUS_FAILED
    order.report_url = report_url
    db.commit()
    logger.warning("Order %d failed at factory", order.id)


def create_order(
    db: Session,
    user: User,
    payload: OrderCreate,
    factory: FactoryClient,
) -> Tuple[OrderOut, FactoryReceipt]:
    _validate_order(db, payload)

    order = Order(
        user_id=user.id,
        franchise_id=payload.franchise_id,
        store_id=payload.store_id,
        status=STATUS_CREATED,
    )
    for item in payload.items:
        order.items.append(
            OrderItem(menu_id=item.menu_id, description=item.description, price=item.price)
        )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Created order %d for user %d (%d items)", order.id, user.id, len(order.items))

    diner = {"id": user.id, "name": user.name, "email": user.email}
    order_body = OrderOut.model_validate(order).model_dump(by_alias=True, mode="json")

    try:
        receipt = factory.submit_order(diner, order_body)
    except FulfillmentError as exc:
        _mark_failed(db, order, exc.report_url)
        raise
    except Exception as exc:
        # Whatever the client raised, the order must not stay "created"
        logger.exception("Factory client error for order %d", order.id)
        _mark_failed(db, order, None)
        raise FulfillmentError() from exc

    order.status = STATUS_FULFILLED
    order.factory_jwt = receipt.jwt
    order.report_url = receipt.report_url
    db.commit()
    db.refresh(order)
    logger.info("Order %d fulfilled", order.id)

    return OrderOut.model_validate(order), receipt
