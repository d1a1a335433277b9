from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    Text,
    Index,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

from .roles import RoleGrant, parse_role

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)  # bcrypt, never serialized
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Ordered by insertion so clients see grants in the order they were given
    roles = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRole.id",
    )
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user")

    @property
    def grants(self) -> list[RoleGrant]:
        return [parse_role(r.role, r.object_id) for r in self.roles]


class UserRole(Base):
    """One role grant. ``object_id`` is the franchise id for franchisee grants."""
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String, nullable=False)  # 'diner', 'admin', 'franchisee'
    object_id = Column(Integer, nullable=True, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "role", "object_id", name="uix_user_role_object"),
    )

    user = relationship("User", back_populates="roles")


class AuthSession(Base):
    """
    A currently-valid bearer token. Deleting the row revokes the token.

    Only the signature segment is stored; it is unique per issued token.
    """
    __tablename__ = "auth_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_signature = Column(String, unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sessions")


class Franchise(Base):
    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    stores = relationship(
        "Store",
        back_populates="franchise",
        cascade="all, delete-orphan",
        order_by="Store.id",
    )


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    franchise_id = Column(Integer, ForeignKey("franchises.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)

    franchise = relationship("Franchise", back_populates="stores")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    price = Column(Float, nullable=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    franchise_id = Column(Integer, nullable=False)
    store_id = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default="created", index=True)  # created/fulfilled/failed
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Filled in from the factory response
    factory_jwt = Column(Text, nullable=True)
    report_url = Column(String, nullable=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    user = relationship("User", back_populates="orders")

    __table_args__ = (
        Index("ix_orders_user_date", "user_id", "date"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    price = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")
