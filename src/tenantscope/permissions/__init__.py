"""Access resolver for the platform → customer → tenant → resource hierarchy.

Defines:
- Roles / ResourcePermissions: the fixed vocabulary
- ScopeLevel: the four levels of the grant hierarchy
- PRECEDENCE_CHAIN: which role at which level dominates narrower scopes
- Pure capability checks over a Principal (``has_tenant_access()`` etc.)
"""

from .access import (
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
    is_any_customer_admin,
    is_super_admin,
    platform_roles,
    resource_permissions,
    tenant_roles,
)
from .constants import ResourcePermissions, Roles, ScopeLevel
from .inheritance import PRECEDENCE_CHAIN, Rung, dominating_rungs

__all__ = [
    "PRECEDENCE_CHAIN",
    "ResourcePermissions",
    "Roles",
    "Rung",
    "ScopeLevel",
    "accessible_customer_ids",
    "accessible_tenant_ids",
    "customer_roles",
    "dominating_rungs",
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
