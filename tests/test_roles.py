"""
Tests for role grants and the authorization helpers built on them.
"""

import pytest

from pizza_service.roles import (
    Admin,
    Diner,
    FranchiseAdmin,
    administers_franchise,
    is_admin,
    parse_role,
    role_key,
    roles_to_dicts,
)


class TestParseRole:
    def test_diner(self):
        assert parse_role("diner") == Diner()

    def test_admin_ignores_object_id(self):
        assert parse_role("admin", None) == Admin()

    def test_franchisee(self):
        assert parse_role("franchisee", 7) == FranchiseAdmin(7)

    def test_franchisee_requires_id(self):
        with pytest.raises(ValueError):
            parse_role("franchisee")

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            parse_role("owner")


class TestWireShape:
    def test_to_dict(self):
        assert roles_to_dicts([Diner(), Admin(), FranchiseAdmin(3)]) == [
            {"role": "diner"},
            {"role": "admin"},
            {"role": "franchisee", "objectId": 3},
        ]

    def test_role_key(self):
        assert role_key(FranchiseAdmin(3)) == ("franchisee", 3)
        assert role_key(Admin()) == ("admin", None)
        assert role_key(Diner()) == ("diner", None)

    def test_role_key_rejects_other_values(self):
        with pytest.raises(TypeError):
            role_key("admin")


class TestAuthorization:
    def test_is_admin(self):
        assert is_admin([Diner(), Admin()])
        assert not is_admin([Diner(), FranchiseAdmin(1)])

    def test_global_admin_administers_every_franchise(self):
        assert administers_franchise([Admin()], 42)

    def test_franchise_admin_scoped_to_one_franchise(self):
        grants = [Diner(), FranchiseAdmin(1)]
        assert administers_franchise(grants, 1)
        assert not administers_franchise(grants, 2)

    def test_diner_administers_nothing(self):
        assert not administers_franchise([Diner()], 1)

    def test_grants_are_hashable(self):
        assert len({FranchiseAdmin(1), FranchiseAdmin(1), Diner()}) == 2
