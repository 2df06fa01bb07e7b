"""Tests for the access resolver and its precedence chain."""

from __future__ import annotations

import pytest
from tenantscope import (
    PRECEDENCE_CHAIN,
    ResourcePermissions,
    Roles,
    ScopeLevel,
    accessible_customer_ids,
    accessible_tenant_ids,
    customer_roles,
    has_customer_access,
    has_customer_role,
    has_platform_role,
    has_resource_access,
    has_resource_permission,
    has_tenant_access,
    has_tenant_role,
    is_admin,
    is_super_admin,
    platform_roles,
    resource_permissions,
    tenant_roles,
)
from tenantscope.permissions import dominating_rungs, is_any_customer_admin


class TestPrecedenceChain:
    """Tests for the central precedence table."""

    def test_order_is_broadest_first(self) -> None:
        assert [(r.level, r.role) for r in PRECEDENCE_CHAIN] == [
            (ScopeLevel.PLATFORM, Roles.SUPER_ADMIN),
            (ScopeLevel.CUSTOMER, Roles.CUSTOMER_ADMIN),
            (ScopeLevel.TENANT, Roles.TENANT_ADMIN),
        ]

    def test_dominating_rungs(self) -> None:
        assert dominating_rungs(ScopeLevel.PLATFORM) == ()
        assert [r.role for r in dominating_rungs(ScopeLevel.CUSTOMER)] == [Roles.SUPER_ADMIN]
        assert [r.role for r in dominating_rungs(ScopeLevel.TENANT)] == [
            Roles.SUPER_ADMIN,
            Roles.CUSTOMER_ADMIN,
        ]
        assert [r.role for r in dominating_rungs(ScopeLevel.RESOURCE)] == [
            Roles.SUPER_ADMIN,
            Roles.CUSTOMER_ADMIN,
            Roles.TENANT_ADMIN,
        ]

    def test_role_vocabulary(self) -> None:
        for attr in ("SUPER_ADMIN", "CUSTOMER_ADMIN", "TENANT_ADMIN", "USER"):
            assert getattr(Roles, attr) in Roles.ALL
        for attr in ("READ", "WRITE", "DELETE", "ADMIN"):
            assert getattr(ResourcePermissions, attr) in ResourcePermissions.ALL


class TestPlatform:
    """Tests for platform-level checks."""

    def test_platform_roles_union(self, make_principal) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"], ["AUDITOR"]])
        assert platform_roles(p) == frozenset({"SUPER_ADMIN", "AUDITOR"})
        assert is_super_admin(p)
        assert has_platform_role(p, "AUDITOR")

    def test_customer_grants_are_not_platform_roles(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["SUPER_ADMIN"])])
        assert platform_roles(p) == frozenset()
        assert not is_super_admin(p)

    def test_case_sensitive(self, make_principal) -> None:
        p = make_principal(platform=[["super_admin"]])
        assert not is_super_admin(p)
        assert has_platform_role(p, "super_admin")


class TestCustomer:
    """Tests for customer-level checks."""

    def test_customer_roles(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["CUSTOMER_ADMIN", "USER"])])
        assert customer_roles(p, "A") == frozenset({"CUSTOMER_ADMIN", "USER"})
        assert has_customer_role(p, "A", Roles.CUSTOMER_ADMIN)
        assert not has_customer_role(p, "B", Roles.CUSTOMER_ADMIN)

    def test_first_duplicate_wins(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["USER"]), ("A", ["CUSTOMER_ADMIN"])])
        assert customer_roles(p, "A") == frozenset({"USER"})
        assert not has_customer_role(p, "A", Roles.CUSTOMER_ADMIN)

    def test_identifier_canonical_comparison(self, make_principal) -> None:
        p = make_principal(customers=[("42", ["USER"])])
        assert has_customer_access(p, 42)

    def test_customer_access_requires_grant(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["USER"])])
        assert has_customer_access(p, "A")
        assert not has_customer_access(p, "B")

    def test_tenant_grant_does_not_imply_customer_access(self, make_principal) -> None:
        """A tenant-admin without a customer grant cannot see the customer."""
        p = make_principal(tenants=[("A", "T1", ["TENANT_ADMIN"])])
        assert has_tenant_access(p, "A", "T1")
        assert not has_customer_access(p, "A")

    def test_grant_without_roles_is_not_access(self, make_principal) -> None:
        p = make_principal(customers=[("A", [])])
        assert not has_customer_access(p, "A")


class TestTenant:
    """Tests for tenant-level checks."""

    def test_tenant_roles(self, make_principal) -> None:
        p = make_principal(tenants=[("A", "T1", ["TENANT_ADMIN"])])
        assert tenant_roles(p, "A", "T1") == frozenset({"TENANT_ADMIN"})
        assert has_tenant_role(p, "A", "T1", Roles.TENANT_ADMIN)

    def test_tenant_keyed_by_pair(self, make_principal) -> None:
        p = make_principal(tenants=[("A", "T1", ["USER"])])
        assert tenant_roles(p, "B", "T1") == frozenset()
        assert not has_tenant_access(p, "B", "T1")

    def test_customer_admin_implies_any_tenant(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["CUSTOMER_ADMIN"])])
        assert has_tenant_access(p, "A", "T-unknown")
        assert not has_tenant_access(p, "B", "T-unknown")

    def test_customer_user_does_not_imply_tenant(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["USER"])])
        assert not has_tenant_access(p, "A", "T1")


class TestResource:
    """Tests for resource-level checks."""

    def test_resource_permissions(self, make_principal) -> None:
        p = make_principal(resources=[("A", "T1", "R1", ["READ", "WRITE"])])
        assert resource_permissions(p, "A", "T1", "R1") == frozenset({"READ", "WRITE"})
        assert has_resource_permission(p, "A", "T1", "R1", ResourcePermissions.READ)
        assert not has_resource_permission(p, "A", "T1", "R1", ResourcePermissions.DELETE)

    def test_resource_keyed_by_triple(self, make_principal) -> None:
        p = make_principal(resources=[("A", "T1", "R1", ["READ"])])
        assert resource_permissions(p, "A", "T2", "R1") == frozenset()
        assert not has_resource_access(p, "A", "T2", "R1")

    def test_roles_do_not_add_permissions(self, make_principal) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"]])
        assert has_resource_access(p, "A", "T1", "R1")
        assert resource_permissions(p, "A", "T1", "R1") == frozenset()


# Table-driven precedence matrix: (grants, customer, tenant, resource) -> expected access
# at customer / tenant / resource level.
PRECEDENCE_MATRIX = [
    pytest.param(dict(platform=[["SUPER_ADMIN"]]), (True, True, True), id="super-admin"),
    pytest.param(dict(platform=[["AUDITOR"]]), (False, False, False), id="other-platform-role"),
    pytest.param(dict(customers=[("A", ["CUSTOMER_ADMIN"])]), (True, True, True), id="customer-admin"),
    pytest.param(dict(customers=[("A", ["USER"])]), (True, False, False), id="customer-user"),
    pytest.param(dict(customers=[("B", ["CUSTOMER_ADMIN"])]), (False, False, False), id="other-customer-admin"),
    pytest.param(dict(tenants=[("A", "T1", ["TENANT_ADMIN"])]), (False, True, True), id="tenant-admin"),
    pytest.param(dict(tenants=[("A", "T1", ["USER"])]), (False, True, False), id="tenant-user"),
    pytest.param(dict(tenants=[("A", "T2", ["TENANT_ADMIN"])]), (False, False, False), id="other-tenant-admin"),
    pytest.param(dict(resources=[("A", "T1", "R1", ["READ"])]), (False, False, True), id="resource-grant"),
    pytest.param(dict(resources=[("A", "T1", "R2", ["READ"])]), (False, False, False), id="other-resource"),
    pytest.param(dict(), (False, False, False), id="no-grants"),
]


class TestPrecedenceMatrix:
    """Higher scopes imply lower-scope access; lower grants never imply higher."""

    @pytest.mark.parametrize(("grants", "expected"), PRECEDENCE_MATRIX)
    def test_matrix(self, make_principal, grants: dict, expected: tuple[bool, bool, bool]) -> None:
        p = make_principal(**grants)
        actual = (
            has_customer_access(p, "A"),
            has_tenant_access(p, "A", "T1"),
            has_resource_access(p, "A", "T1", "R1"),
        )
        assert actual == expected

    @pytest.mark.parametrize("customer_id", ["A", "B", 7, "zzz"])
    @pytest.mark.parametrize("tenant_id", ["T1", "T9", 3])
    def test_super_admin_dominates(self, make_principal, customer_id: object, tenant_id: object) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"]])
        assert has_customer_access(p, customer_id)
        assert has_tenant_access(p, customer_id, tenant_id)
        assert has_resource_access(p, customer_id, tenant_id, "R-any")

    @pytest.mark.parametrize("tenant_id", ["T1", "T2", "never-granted"])
    def test_customer_admin_dominates_tenants(self, make_principal, tenant_id: str) -> None:
        p = make_principal(customers=[("A", ["CUSTOMER_ADMIN"])], tenants=[("A", "T1", ["USER"])])
        assert has_tenant_access(p, "A", tenant_id)


class TestFailClosed:
    """Absent or malformed inputs resolve to the most restrictive answer."""

    def test_none_principal(self) -> None:
        assert platform_roles(None) == frozenset()
        assert not is_super_admin(None)
        assert not has_platform_role(None, "SUPER_ADMIN")
        assert customer_roles(None, "A") == frozenset()
        assert not has_customer_access(None, "A")
        assert tenant_roles(None, "A", "T1") == frozenset()
        assert not has_tenant_access(None, "A", "T1")
        assert resource_permissions(None, "A", "T1", "R1") == frozenset()
        assert not has_resource_access(None, "A", "T1", "R1")
        assert accessible_customer_ids(None) == []
        assert accessible_tenant_ids(None, "A") == []
        assert not is_admin(None)

    def test_none_scope_ids_even_for_super_admin(self, make_principal) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"]])
        assert not has_customer_access(p, None)
        assert not has_tenant_access(p, "A", None)
        assert not has_resource_access(p, "A", "T1", None)

    def test_malformed_ids_do_not_raise(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["CUSTOMER_ADMIN"])])
        assert customer_roles(p, {"id": "A"}) == frozenset()
        assert not has_tenant_access(p, ["A"], "T1")

    @pytest.mark.parametrize("name", [["SUPER_ADMIN"], {"SUPER_ADMIN"}, {"role": "READ"}, None, 7])
    def test_malformed_role_names_do_not_raise(self, make_principal, name: object) -> None:
        p = make_principal(
            platform=[["SUPER_ADMIN"]],
            customers=[("A", ["CUSTOMER_ADMIN"])],
            tenants=[("A", "T1", ["TENANT_ADMIN"])],
            resources=[("A", "T1", "R1", ["READ"])],
        )
        assert not has_platform_role(p, name)
        assert not has_customer_role(p, "A", name)
        assert not has_tenant_role(p, "A", "T1", name)
        assert not has_resource_permission(p, "A", "T1", "R1", name)

    def test_not_a_principal(self) -> None:
        raw = {"id": "u-1", "memberships": [{"customerId": None, "roles": ["SUPER_ADMIN"]}]}
        assert not is_super_admin(raw)  # type: ignore[arg-type]

    def test_empty_principal(self, make_principal) -> None:
        p = make_principal()
        assert not has_customer_access(p, "A")
        assert not is_admin(p)


class TestAggregates:
    """Tests for accessible id listings."""

    def test_accessible_customer_ids_direct_only(self, make_principal) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"]], customers=[("B", ["USER"]), ("A", ["CUSTOMER_ADMIN"])])
        assert accessible_customer_ids(p) == ["B", "A"]

    def test_super_admin_not_expanded(self, make_principal) -> None:
        p = make_principal(platform=[["SUPER_ADMIN"]])
        assert accessible_customer_ids(p) == []

    def test_accessible_tenant_ids(self, make_principal) -> None:
        p = make_principal(
            tenants=[("A", "T1", ["USER"]), ("B", "T9", ["USER"]), ("A", "T2", ["TENANT_ADMIN"])],
        )
        assert accessible_tenant_ids(p, "A") == ["T1", "T2"]
        assert accessible_tenant_ids(p, "C") == []
        assert accessible_tenant_ids(p, None) == []

    def test_results_are_fresh_containers(self, make_principal) -> None:
        p = make_principal(customers=[("A", ["USER"])])
        first = accessible_customer_ids(p)
        first.append("injected")
        assert accessible_customer_ids(p) == ["A"]
        assert not has_customer_access(p, "injected")

    def test_is_admin(self, make_principal) -> None:
        assert is_admin(make_principal(platform=[["SUPER_ADMIN"]]))
        assert is_admin(make_principal(customers=[("A", ["USER"]), ("B", ["CUSTOMER_ADMIN"])]))
        assert is_any_customer_admin(make_principal(customers=[("B", ["CUSTOMER_ADMIN"])]))
        assert not is_admin(make_principal(tenants=[("A", "T1", ["TENANT_ADMIN"])]))
