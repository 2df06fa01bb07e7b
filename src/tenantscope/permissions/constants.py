"""Role and permission vocabulary for tenantscope.

Provides:
- ``Roles`` — the fixed role vocabulary, granted at platform, customer or tenant scope.
- ``ResourcePermissions`` — per-resource permission strings (``READ``, ``WRITE``, ...).
- ``ScopeLevel`` — the four levels of the grant hierarchy.

Membership tests against these values are exact, case-sensitive string
matches: ``"super_admin"`` is not ``SUPER_ADMIN``.
"""

from __future__ import annotations

from enum import Enum


class Roles:
    """Canonical role constants.

    Roles are compiled into the resolver; there is no runtime role
    authoring. Which roles dominate which scopes is declared once in
    :data:`tenantscope.permissions.inheritance.PRECEDENCE_CHAIN`.
    """

    SUPER_ADMIN = "SUPER_ADMIN"  # Platform scope, dominates everything
    CUSTOMER_ADMIN = "CUSTOMER_ADMIN"  # Customer scope, dominates its tenants
    TENANT_ADMIN = "TENANT_ADMIN"  # Tenant scope, dominates its resources
    USER = "USER"  # Plain membership, no dominance

    ALL = frozenset({"SUPER_ADMIN", "CUSTOMER_ADMIN", "TENANT_ADMIN", "USER"})


class ResourcePermissions:
    """Permission strings carried by resource (VMF) grants.

    Independent of roles: a ``WRITE`` grant on a resource does not make
    the principal a tenant member, and a tenant role does not add entries
    to ``resource_permissions()``.
    """

    READ = "READ"
    WRITE = "WRITE"
    DELETE = "DELETE"
    ADMIN = "ADMIN"

    ALL = frozenset({"READ", "WRITE", "DELETE", "ADMIN"})


class ScopeLevel(str, Enum):
    """Levels of the grant hierarchy, broadest first."""

    PLATFORM = "platform"
    CUSTOMER = "customer"
    TENANT = "tenant"
    RESOURCE = "resource"


__all__ = [
    "ResourcePermissions",
    "Roles",
    "ScopeLevel",
]
