"""Menu item schemas. The menu is public; only admins add items."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class MenuItemOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float


class MenuItemCreate(CamelModel):
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = Field(ge=0)
