"""
User Service for JWT Pizza Service
==================================

Registration, login, profile updates, and role grants.

Every function that changes state commits before returning. Input is
validated before any row is written, so a rejected registration leaves no
partial user behind.

Key Functions:
--------------
- register / login: create a session and return ``(user, token)``
- update_user: self-or-admin profile change, re-issues a token
- grant_role / revoke_franchise_grants: manage role rows
- serialize_user: the public ``{id, name, email, roles}`` shape
"""

import logging
from typing import Iterable, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import hash_password, start_session, verify_password
from ..exceptions import AuthError, AuthorizationError, NotFoundError, ValidationError
from ..models import User, UserRole
from ..roles import FRANCHISEE, Diner, RoleGrant, is_admin, role_key, roles_to_dicts
from ..schemas.auth import UserOut


logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def serialize_user(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=roles_to_dicts(user.grants),
    )


def _check_password_length(password: str) -> None:
    # bcrypt only hashes the first 72 bytes and refuses anything longer
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def grant_role(user: User, grant: RoleGrant) -> None:
    """Attach a grant unless the user already holds it. Does not commit."""
    role, object_id = role_key(grant)
    for existing in user.roles:
        if existing.role == role and existing.object_id == object_id:
            return
    user.roles.append(UserRole(role=role, object_id=object_id))


def revoke_franchise_grants(db: Session, franchise_id: int) -> int:
    """Remove every franchisee grant for a franchise. Does not commit."""
    return (
        db.query(UserRole)
        .filter(UserRole.role == FRANCHISEE, UserRole.object_id == franchise_id)
        .delete(synchronize_session="fetch")
    )


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    grants: Iterable[RoleGrant] = (Diner(),),
) -> User:
    if get_user_by_email(db, email):
        raise ValidationError("email already registered")

    user = User(name=name, email=email, password_hash=hash_password(password))
    for grant in grants:
        grant_role(user, grant)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ValidationError("email already registered")
    db.refresh(user)
    logger.info("Created user %d", user.id)
    return user


def register(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> Tuple[User, str]:
    if not name or not email or not password:
        raise ValidationError("name, email, and password are required")
    _check_password_length(password)

    user = create_user(db, name, email, password)
    return user, start_session(db, user)


def login(db: Session, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
    if not email or not password:
        raise AuthError("invalid credentials")

    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthError("invalid credentials")

    return user, start_session(db, user)


def update_user(
    db: Session,
    actor: User,
    target_id: int,
    name: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> Tuple[User, str]:
    """
    Change any subset of name/email/password on ``target_id``.

    Only the user themself or a global admin may do this. The returned token
    is bound to the updated identity; previously issued tokens stay valid
    until they are logged out.
    """
    if actor.id != target_id and not is_admin(actor.grants):
        raise AuthorizationError("unauthorized")

    user = actor if actor.id == target_id else get_user(db, target_id)
    if user is None:
        raise NotFoundError("user not found")

    if email is not None and email != user.email:
        if not email:
            raise ValidationError("email cannot be empty")
        if get_user_by_email(db, email):
            raise ValidationError("email already registered")
        user.email = email
    if name is not None:
        if not name:
            raise ValidationError("name cannot be empty")
        user.name = name
    if password:
        _check_password_length(password)
        user.password_hash = hash_password(password)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("email already registered")
    db.refresh(user)
    logger.info("User %d updated by user %d", user.id, actor.id)

    return user, start_session(db, user)
