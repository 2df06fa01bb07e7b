"""Access resolver: capability checks against a Principal.

Pure, total functions. Every argument may be ``None`` (or malformed) and
the answer is then the most restrictive one: ``False`` or an empty
container. Nothing here raises for a denial and nothing mutates the
principal. Set results are fresh ``frozenset``s and list results are
fresh lists, so callers never alias principal internals.

Identifiers are compared by canonical string form
(:func:`tenantscope.principal.canonical_id`).
"""

from __future__ import annotations

import logging
from typing import Any

from ..exceptions import InvalidIdentifierError
from ..principal import CustomerGrant, Principal, ResourceGrant, TenantGrant, canonical_id
from .constants import Roles, ScopeLevel
from .inheritance import Rung, dominating_rungs

logger = logging.getLogger(__name__)


def _key(value: Any) -> str | None:
    """Canonical id, or None when absent or malformed (fail-closed)."""
    try:
        return canonical_id(value)
    except InvalidIdentifierError:
        return None


def _principal(value: Any) -> Principal | None:
    return value if isinstance(value, Principal) else None


def _name(value: Any) -> str | None:
    """Role or permission name, or None when not a string (fail-closed)."""
    return value if isinstance(value, str) else None


# ── Platform ───────────────────────────────────────────


def platform_roles(principal: Principal | None) -> frozenset[str]:
    """All roles held at platform scope (union over platform grants)."""
    p = _principal(principal)
    if p is None:
        return frozenset()
    return frozenset(role for grant in p.platform_grants for role in grant.roles)


def has_platform_role(principal: Principal | None, role: str) -> bool:
    """Check whether the principal holds ``role`` at platform scope."""
    name = _name(role)
    return name is not None and name in platform_roles(principal)


def is_super_admin(principal: Principal | None) -> bool:
    """Shorthand for ``has_platform_role(principal, Roles.SUPER_ADMIN)``."""
    return has_platform_role(principal, Roles.SUPER_ADMIN)


# ── Customer ───────────────────────────────────────────


def _customer_grant(principal: Principal | None, customer_id: Any) -> CustomerGrant | None:
    p = _principal(principal)
    cid = _key(customer_id)
    if p is None or cid is None:
        return None
    # First match in stored order wins
    return next((g for g in p.customer_grants if g.customer_id == cid), None)


def customer_roles(principal: Principal | None, customer_id: Any) -> frozenset[str]:
    """Roles held directly for one customer."""
    grant = _customer_grant(principal, customer_id)
    return frozenset(grant.roles) if grant else frozenset()


def has_customer_role(principal: Principal | None, customer_id: Any, role: str) -> bool:
    """Check whether the principal holds ``role`` for ``customer_id``."""
    name = _name(role)
    return name is not None and name in customer_roles(principal, customer_id)


# ── Tenant ─────────────────────────────────────────────


def _tenant_grant(principal: Principal | None, customer_id: Any, tenant_id: Any) -> TenantGrant | None:
    p = _principal(principal)
    cid, tid = _key(customer_id), _key(tenant_id)
    if p is None or cid is None or tid is None:
        return None
    return next(
        (g for g in p.tenant_grants if g.customer_id == cid and g.tenant_id == tid),
        None,
    )


def tenant_roles(principal: Principal | None, customer_id: Any, tenant_id: Any) -> frozenset[str]:
    """Roles held directly for one (customer, tenant) pair."""
    grant = _tenant_grant(principal, customer_id, tenant_id)
    return frozenset(grant.roles) if grant else frozenset()


def has_tenant_role(principal: Principal | None, customer_id: Any, tenant_id: Any, role: str) -> bool:
    """Check whether the principal holds ``role`` for the tenant."""
    name = _name(role)
    return name is not None and name in tenant_roles(principal, customer_id, tenant_id)


# ── Resource ───────────────────────────────────────────


def _resource_grant(
    principal: Principal | None,
    customer_id: Any,
    tenant_id: Any,
    resource_id: Any,
) -> ResourceGrant | None:
    p = _principal(principal)
    cid, tid, rid = _key(customer_id), _key(tenant_id), _key(resource_id)
    if p is None or cid is None or tid is None or rid is None:
        return None
    return next(
        (
            g
            for g in p.resource_grants
            if g.customer_id == cid and g.tenant_id == tid and g.resource_id == rid
        ),
        None,
    )


def resource_permissions(
    principal: Principal | None,
    customer_id: Any,
    tenant_id: Any,
    resource_id: Any,
) -> frozenset[str]:
    """Permissions granted directly on one resource."""
    grant = _resource_grant(principal, customer_id, tenant_id, resource_id)
    return frozenset(grant.permissions) if grant else frozenset()


def has_resource_permission(
    principal: Principal | None,
    customer_id: Any,
    tenant_id: Any,
    resource_id: Any,
    permission: str,
) -> bool:
    """Check whether the principal holds ``permission`` on the resource.

    Direct grants only; roles do not add permissions here.

    Example::

        has_resource_permission(p, "A", "T1", "R1", ResourcePermissions.READ)    # True
        has_resource_permission(p, "A", "T1", "R1", ResourcePermissions.DELETE)  # False
    """
    name = _name(permission)
    return name is not None and name in resource_permissions(principal, customer_id, tenant_id, resource_id)


# ── Hierarchical access ────────────────────────────────


def _rung_held(principal: Principal | None, rung: Rung, customer_id: Any, tenant_id: Any) -> bool:
    if rung.level is ScopeLevel.PLATFORM:
        return has_platform_role(principal, rung.role)
    if rung.level is ScopeLevel.CUSTOMER:
        return has_customer_role(principal, customer_id, rung.role)
    return has_tenant_role(principal, customer_id, tenant_id, rung.role)


def _dominated(
    principal: Principal | None,
    level: ScopeLevel,
    customer_id: Any,
    tenant_id: Any = None,
) -> bool:
    """Walk the precedence chain above ``level``; True on the first rung held."""
    for rung in dominating_rungs(level):
        if _rung_held(principal, rung, customer_id, tenant_id):
            logger.debug(
                "%s access to customer=%s tenant=%s implied by %s",
                level.value,
                customer_id,
                tenant_id,
                rung.role,
            )
            return True
    return False


def has_customer_access(principal: Principal | None, customer_id: Any) -> bool:
    """Check whether the principal may operate within a customer.

    Checks in order:
    1. ``SUPER_ADMIN`` at platform scope
    2. any role held directly for the customer
    """
    if _key(customer_id) is None:
        return False
    return _dominated(principal, ScopeLevel.CUSTOMER, customer_id) or bool(
        customer_roles(principal, customer_id)
    )


def has_tenant_access(principal: Principal | None, customer_id: Any, tenant_id: Any) -> bool:
    """Check whether the principal may operate within a tenant.

    Checks in order:
    1. ``SUPER_ADMIN`` at platform scope
    2. ``CUSTOMER_ADMIN`` for the owning customer
    3. any role held directly for the tenant

    A tenant grant alone never implies customer access.
    """
    if _key(customer_id) is None or _key(tenant_id) is None:
        return False
    return _dominated(principal, ScopeLevel.TENANT, customer_id, tenant_id) or bool(
        tenant_roles(principal, customer_id, tenant_id)
    )


def has_resource_access(
    principal: Principal | None,
    customer_id: Any,
    tenant_id: Any,
    resource_id: Any,
) -> bool:
    """Check whether the principal may reach a resource.

    Checks in order:
    1. ``SUPER_ADMIN`` at platform scope
    2. ``CUSTOMER_ADMIN`` for the owning customer
    3. ``TENANT_ADMIN`` for the owning tenant
    4. any permission granted directly on the resource
    """
    if _key(customer_id) is None or _key(tenant_id) is None or _key(resource_id) is None:
        return False
    return _dominated(principal, ScopeLevel.RESOURCE, customer_id, tenant_id) or bool(
        resource_permissions(principal, customer_id, tenant_id, resource_id)
    )


# ── Aggregates ─────────────────────────────────────────


def accessible_customer_ids(principal: Principal | None) -> list[str]:
    """Customer ids the principal holds a direct grant for, in stored order.

    Platform grants are excluded and ``SUPER_ADMIN`` does not expand this
    to every customer: enumerating all customers is a directory lookup,
    not a grant lookup.
    """
    p = _principal(principal)
    if p is None:
        return []
    return list(dict.fromkeys(g.customer_id for g in p.customer_grants))


def accessible_tenant_ids(principal: Principal | None, customer_id: Any) -> list[str]:
    """Tenant ids with a direct grant under ``customer_id``, in stored order."""
    p = _principal(principal)
    cid = _key(customer_id)
    if p is None or cid is None:
        return []
    return list(dict.fromkeys(g.tenant_id for g in p.tenant_grants if g.customer_id == cid))


def is_any_customer_admin(principal: Principal | None) -> bool:
    """True if ``CUSTOMER_ADMIN`` is held for at least one customer."""
    return any(
        has_customer_role(principal, customer_id, Roles.CUSTOMER_ADMIN)
        for customer_id in accessible_customer_ids(principal)
    )


def is_admin(principal: Principal | None) -> bool:
    """Super-admin, or customer-admin of any customer.

    The gate used by consumers such as system monitoring to decide
    whether admin-only panels are visible at all.
    """
    return is_super_admin(principal) or is_any_customer_admin(principal)


__all__ = [
    "accessible_customer_ids",
    "accessible_tenant_ids",
    "customer_roles",
    "has_customer_access",
    "has_customer_role",
    "has_platform_role",
    "has_resource_access",
    "has_resource_permission",
    "has_tenant_access",
    "has_tenant_role",
    "is_admin",
    "is_any_customer_admin",
    "is_super_admin",
    "platform_roles",
    "resource_permissions",
    "tenant_roles",
]
