"""Route guarding for protected regions.

Usage::

    from tenantscope.guard import RouteGuard, RouteRequirements, CustomerRoleRequirement

    guard = RouteGuard(
        context,
        RouteRequirements(
            customer_role=CustomerRoleRequirement(customer_id="A", role=Roles.CUSTOMER_ADMIN),
        ),
        config=load_config_from_env(),
    )
    guard.enforce(current_location, navigator)

Redirect targets come from ``GuardConfig`` (env vars
``TENANTSCOPE_LOGIN_PATH`` / ``TENANTSCOPE_UNAUTHORIZED_PATH``).
"""

from __future__ import annotations

from .route import (
    CustomerRoleRequirement,
    GuardDecision,
    GuardState,
    Navigator,
    RouteGuard,
    RouteRequirements,
    TenantRoleRequirement,
)

__all__ = [
    "CustomerRoleRequirement",
    "GuardDecision",
    "GuardState",
    "Navigator",
    "RouteGuard",
    "RouteRequirements",
    "TenantRoleRequirement",
]
