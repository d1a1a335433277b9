"""
Franchise Service for JWT Pizza Service
=======================================

CRUD over franchises and their stores.

Authorization:
--------------
- Listing franchises is public.
- Creating, updating, and deleting a franchise requires a global admin.
- Creating or deleting a store requires a global admin or an admin of that
  franchise (a ``FranchiseAdmin`` grant with the franchise's id).

Franchise admins are not a separate table: they are the users holding a
``franchisee`` grant whose object id is the franchise id. Creating a
franchise grants the role; deleting the franchise revokes it.

Deleting an absent franchise or store succeeds without error, so a repeated
delete returns the same response as the first one.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import AuthorizationError, NotFoundError, ValidationError
from ..models import Franchise, Store, User, UserRole
from ..roles import FRANCHISEE, FranchiseAdmin, administers_franchise, is_admin
from ..schemas.franchises import (
    FranchiseAdminOut,
    FranchiseOut,
    FranchiseSummaryOut,
    StoreDetailOut,
    StoreOut,
)
from .users import get_user_by_email, grant_role, revoke_franchise_grants


logger = logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================

def franchise_admins(db: Session, franchise_id: int) -> List[User]:
    return (
        db.query(User)
        .join(UserRole, UserRole.user_id == User.id)
        .filter(UserRole.role == FRANCHISEE, UserRole.object_id == franchise_id)
        .order_by(User.id)
        .all()
    )


def serialize_franchise(db: Session, franchise: Franchise) -> FranchiseOut:
    return FranchiseOut(
        id=franchise.id,
        name=franchise.name,
        admins=[
            FranchiseAdminOut(id=u.id, name=u.name, email=u.email)
            for u in franchise_admins(db, franchise.id)
        ],
        stores=[StoreOut(id=s.id, name=s.name) for s in franchise.stores],
    )


def _resolve_admins(db: Session, emails: Sequence[str]) -> List[User]:
    users = []
    for email in emails:
        user = get_user_by_email(db, email)
        if user is None:
            raise NotFoundError(f"unknown user for franchise admin {email} provided")
        users.append(user)
    return users


def _name_pattern(name: str) -> str:
    """Translate the client's ``*`` wildcard into a SQL LIKE pattern."""
    escaped = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "%")


# =============================================================================
# Franchises
# =============================================================================

def list_franchises(
    db: Session,
    page: int = 0,
    limit: int = 10,
    name: str = "*",
) -> Tuple[List[FranchiseSummaryOut], bool]:
    """Return one page of franchises and whether another page follows."""
    page = max(page, 0)
    limit = max(limit, 1)

    query = db.query(Franchise)
    if name and name != "*":
        query = query.filter(Franchise.name.like(_name_pattern(name), escape="\\"))

    rows = query.order_by(Franchise.id).offset(page * limit).limit(limit + 1).all()
    more = len(rows) > limit
    franchises = [
        FranchiseSummaryOut(
            id=f.id,
            name=f.name,
            stores=[StoreOut(id=s.id, name=s.name) for s in f.stores],
        )
        for f in rows[:limit]
    ]
    return franchises, more


def get_user_franchises(db: Session, actor: User, user_id: int) -> List[FranchiseOut]:
    """Franchises ``user_id`` administers. Other diners see an empty list."""
    if actor.id != user_id and not is_admin(actor.grants):
        return []

    franchise_ids = [
        row.object_id
        for row in db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role == FRANCHISEE)
        .all()
    ]
    if not franchise_ids:
        return []

    franchises = (
        db.query(Franchise)
        .filter(Franchise.id.in_(franchise_ids))
        .order_by(Franchise.id)
        .all()
    )
    return [serialize_franchise(db, f) for f in franchises]


def create_franchise(
    db: Session,
    actor: User,
    name: str,
    admin_emails: Sequence[str] = (),
) -> FranchiseOut:
    if not is_admin(actor.grants):
        raise AuthorizationError("unable to create a franchise")
    if not name:
        raise ValidationError("franchise name is required")
    if db.query(Franchise).filter(Franchise.name == name).first():
        raise ValidationError("franchise name already exists")

    admins = _resolve_admins(db, admin_emails)

    franchise = Franchise(name=name)
    db.add(franchise)
    try:
        db.flush()
        for user in admins:
            grant_role(user, FranchiseAdmin(franchise.id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("franchise name already exists")
    db.refresh(franchise)

    logger.info("Created franchise %s (id=%d) by user %d", franchise.name, franchise.id, actor.id)
    return serialize_franchise(db, franchise)


def update_franchise(
    db: Session,
    actor: User,
    franchise_id: int,
    name: Optional[str] = None,
    admin_emails: Optional[Sequence[str]] = None,
) -> FranchiseOut:
    if not is_admin(actor.grants):
        raise AuthorizationError("unable to update a franchise")

    franchise = db.get(Franchise, franchise_id)
    if franchise is None:
        raise NotFoundError("franchise not found")

    if name is not None and name != franchise.name:
        if not name:
            raise ValidationError("franchise name is required")
        franchise.name = name

    if admin_emails is not None:
        admins = _resolve_admins(db, admin_emails)
        revoke_franchise_grants(db, franchise.id)
        db.flush()
        for user in admins:
            db.expire(user, ["roles"])
            grant_role(user, FranchiseAdmin(franchise.id))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("franchise name already exists")
    db.refresh(franchise)

    logger.info("Updated franchise %s (id=%d) by user %d", franchise.name, franchise.id, actor.id)
    return serialize_franchise(db, franchise)


def delete_franchise(db: Session, actor: User, franchise_id: int) -> None:
    if not is_admin(actor.grants):
        raise AuthorizationError("unable to delete a franchise")

    franchise = db.get(Franchise, franchise_id)
    if franchise is None:
        logger.debug("Franchise %d already absent", franchise_id)
        return

    revoke_franchise_grants(db, franchise.id)
    db.delete(franchise)
    db.commit()
    logger.info("Deleted franchise id=%d by user %d", franchise_id, actor.id)


# =============================================================================
# Stores
# =============================================================================

def create_store(db: Session, actor: User, franchise_id: int, name: str) -> StoreDetailOut:
    if not administers_franchise(actor.grants, franchise_id):
        raise AuthorizationError("unable to create a store")
    if not name:
        raise ValidationError("store name is required")

    franchise = db.get(Franchise, franchise_id)
    if franchise is None:
        raise NotFoundError("franchise not found")

    store = Store(franchise_id=franchise.id, name=name)
    db.add(store)
    db.commit()
    db.refresh(store)

    logger.info("Created store %s (id=%d) in franchise %d", store.name, store.id, franchise.id)
    return StoreDetailOut(id=store.id, franchise_id=store.franchise_id, name=store.name)


def delete_store(db: Session, actor: User, franchise_id: int, store_id: int) -> None:
    if not administers_franchise(actor.grants, franchise_id):
        raise AuthorizationError("unable to delete a store")

    store = (
        db.query(Store)
        .filter(Store.id == store_id, Store.franchise_id == franchise_id)
        .first()
    )
    if store is None:
        logger.debug("Store %d in franchise %d already absent", store_id, franchise_id)
        return

    db.delete(store)
    db.commit()
    logger.info("Deleted store id=%d from franchise %d", store_id, franchise_id)
