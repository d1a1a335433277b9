"""
Role grants for users.

A user holds an ordered set of grants. Each grant is one of three variants:

- ``Diner``: every registered user; may order and manage their own profile.
- ``Admin``: global administrator.
- ``FranchiseAdmin(franchise_id)``: administers a single franchise and its
  stores. Stored and sent over the wire as role ``"franchisee"``.

On the wire and in the ``user_roles`` table a grant is
``{"role": "franchisee", "objectId": 7}``; ``parse_role`` and ``to_dict``
convert between the two shapes. Authorization checks are written against the
variants, never against raw strings.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union


DINER = "diner"
ADMIN = "admin"
FRANCHISEE = "franchisee"


@dataclass(frozen=True)
class Diner:
    def to_dict(self) -> Dict[str, Any]:
        return {"role": DINER}


@dataclass(frozen=True)
class Admin:
    def to_dict(self) -> Dict[str, Any]:
        return {"role": ADMIN}


@dataclass(frozen=True)
class FranchiseAdmin:
    franchise_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"role": FRANCHISEE, "objectId": self.franchise_id}


RoleGrant = Union[Diner, Admin, FranchiseAdmin]


def parse_role(role: str, object_id: Optional[int] = None) -> RoleGrant:
    """Build a grant from its stored ``(role, objectId)`` pair."""
    if role == DINER:
        return Diner()
    if role == ADMIN:
        return Admin()
    if role == FRANCHISEE:
        if object_id is None:
            raise ValueError("franchisee role requires a franchise id")
        return FranchiseAdmin(int(object_id))
    raise ValueError(f"unknown role: {role!r}")


def role_key(grant: RoleGrant) -> tuple:
    """Return the ``(role, object_id)`` pair used for storage."""
    if isinstance(grant, FranchiseAdmin):
        return (FRANCHISEE, grant.franchise_id)
    if isinstance(grant, Admin):
        return (ADMIN, None)
    if isinstance(grant, Diner):
        return (DINER, None)
    raise TypeError(f"not a role grant: {grant!r}")


def is_admin(grants: Iterable[RoleGrant]) -> bool:
    return any(isinstance(g, Admin) for g in grants)


def administers_franchise(grants: Iterable[RoleGrant], franchise_id: int) -> bool:
    """True for global admins and for admins of this specific franchise."""
    for grant in grants:
        if isinstance(grant, Admin):
            return True
        if isinstance(grant, FranchiseAdmin) and grant.franchise_id == franchise_id:
            return True
    return False


def roles_to_dicts(grants: Iterable[RoleGrant]) -> List[Dict[str, Any]]:
    return [g.to_dict() for g in grants]
