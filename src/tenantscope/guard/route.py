"""Route guard — requirements, decision, and navigation gate.

Provides:
- ``GuardState`` — RESOLVING / DENIED / GRANTED.
- ``CustomerRoleRequirement`` / ``TenantRoleRequirement`` / ``RouteRequirements``.
- ``GuardDecision`` — result of evaluating a guard (mirrors a redirect or a render).
- ``Navigator`` — external navigation collaborator.
- ``RouteGuard`` — evaluates a ``ScopeContext`` against a region's requirements.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator

from ..config import GuardConfig, TenantScopeConfig
from ..facade import AuthStatus, ScopeContext
from ..logging import get_scope_logger
from ..permissions import access
from ..principal import canonical_id

logger = get_scope_logger(__name__)


# ── Requirements ─────────────────────────────────────────────────


class GuardState(str, Enum):
    """Three-state gate."""

    RESOLVING = "resolving"  # Session not determined yet; render a pending indicator
    DENIED = "denied"  # Redirect
    GRANTED = "granted"  # Render the protected region


class _Requirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_validator("customer_id", "tenant_id", mode="before", check_fields=False)
    @classmethod
    def validate_identifier(cls, v: Any) -> str:
        ident = canonical_id(v)
        if ident is None:
            raise ValueError("identifier is required")
        return ident


class CustomerRoleRequirement(_Requirement):
    """Require ``role`` held directly for ``customer_id``."""

    customer_id: str
    role: str


class TenantRoleRequirement(_Requirement):
    """Require ``role`` held directly for the (customer, tenant) pair."""

    customer_id: str
    tenant_id: str
    role: str


class RouteRequirements(BaseModel):
    """Capabilities a protected region demands.

    All declared requirements must pass. None declared means "signed in is
    enough". Checked in order: platform role, customer role, tenant role.
    """

    model_config = ConfigDict(frozen=True)

    platform_role: Optional[str] = None
    customer_role: Optional[CustomerRoleRequirement] = None
    tenant_role: Optional[TenantRoleRequirement] = None

    @property
    def is_empty(self) -> bool:
        return self.platform_role is None and self.customer_role is None and self.tenant_role is None


# ── Decision ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GuardDecision:
    """Result from evaluating a route guard.

    ``reason`` is for logs and tests only; it is never shown to end users.
    """

    state: GuardState
    redirect_to: str | None = None
    return_to: str | None = None
    reason: str = ""

    @property
    def granted(self) -> bool:
        return self.state is GuardState.GRANTED

    @property
    def denied(self) -> bool:
        return self.state is GuardState.DENIED

    @property
    def pending(self) -> bool:
        return self.state is GuardState.RESOLVING


@runtime_checkable
class Navigator(Protocol):
    """External navigation collaborator (router / history)."""

    def redirect(self, path: str, *, return_to: str | None = None) -> None:
        """Replace the current location with ``path``.

        ``return_to`` marks where a post-authentication flow should go back to.
        """
        ...


# ── Route Guard ──────────────────────────────────────────────────


class RouteGuard:
    """Gate for one protected region.

    Args:
        context: The session's ScopeContext.
        requirements: Capabilities the region demands (None = signed in only).
        config: Redirect targets; a ``GuardConfig`` or a full ``TenantScopeConfig``.

    Usage::

        guard = RouteGuard(
            context,
            RouteRequirements(platform_role=Roles.SUPER_ADMIN),
        )
        decision = guard.enforce("/app/super-admin/customers", navigator)
        if decision.granted:
            render_region()
    """

    def __init__(
        self,
        context: ScopeContext,
        requirements: RouteRequirements | None = None,
        config: GuardConfig | TenantScopeConfig | None = None,
    ) -> None:
        self._context = context
        self._requirements = requirements or RouteRequirements()
        if isinstance(config, TenantScopeConfig):
            config = config.guard
        self._config = config or GuardConfig()

    @property
    def requirements(self) -> RouteRequirements:
        return self._requirements

    def _unmet_requirement(self) -> str | None:
        """First failing requirement as a reason string, or None if all pass."""
        principal = self._context.principal
        req = self._requirements

        if req.platform_role is not None and not access.has_platform_role(principal, req.platform_role):
            return f"missing platform role: {req.platform_role}"

        if req.customer_role is not None and not access.has_customer_role(
            principal,
            req.customer_role.customer_id,
            req.customer_role.role,
        ):
            return f"missing customer role: {req.customer_role.role} @ {req.customer_role.customer_id}"

        if req.tenant_role is not None and not access.has_tenant_role(
            principal,
            req.tenant_role.customer_id,
            req.tenant_role.tenant_id,
            req.tenant_role.role,
        ):
            return (
                f"missing tenant role: {req.tenant_role.role} @ "
                f"{req.tenant_role.customer_id}/{req.tenant_role.tenant_id}"
            )

        return None

    def evaluate(self, location: str) -> GuardDecision:
        """Decide what the region should do for ``location``. No side effects."""
        status = self._context.status
        if status in (AuthStatus.IDLE, AuthStatus.LOADING):
            return GuardDecision(state=GuardState.RESOLVING, reason=f"session {status.value}")

        if not self._context.is_authenticated:
            return GuardDecision(
                state=GuardState.DENIED,
                redirect_to=self._config.login_path,
                return_to=location,
                reason="not authenticated",
            )

        unmet = self._unmet_requirement()
        if unmet is not None:
            return GuardDecision(
                state=GuardState.DENIED,
                redirect_to=self._config.unauthorized_path,
                reason=unmet,
            )

        return GuardDecision(state=GuardState.GRANTED)

    def enforce(self, location: str, navigator: Navigator) -> GuardDecision:
        """Evaluate and, when denied, redirect through ``navigator``."""
        decision = self.evaluate(location)

        if decision.denied:
            logger.warning(
                "Route %s DENIED: %s (redirect %s)",
                location,
                decision.reason,
                decision.redirect_to,
                context=self._context,
            )
            navigator.redirect(decision.redirect_to, return_to=decision.return_to)
        elif decision.granted:
            logger.debug("Route %s GRANTED", location, context=self._context)

        return decision


__all__ = [
    "CustomerRoleRequirement",
    "GuardDecision",
    "GuardState",
    "Navigator",
    "RouteGuard",
    "RouteRequirements",
    "TenantRoleRequirement",
]
