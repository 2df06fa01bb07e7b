"""Scope-aware facade: resolver + session scope behind one object.

Provides:
- ``AuthStatus`` — idle → loading → authenticated | unauthenticated.
- ``ScopeContext`` — owns the ambient principal and the session scope
  store, answers scope-relative questions, and signals the tenant
  directory whenever the selected customer changes.

Callers never thread ``(principal, customer_id, tenant_id)`` by hand::

    context = ScopeContext(directory=tenant_directory)
    context.sign_in(Principal.from_payload(me))
    if context.has_current_customer_role(Roles.CUSTOMER_ADMIN):
        ...
    context.sign_out()   # principal and scope dropped together
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .config import TenantScopeConfig
from .exceptions import ScopePreconditionError
from .permissions import access
from .principal import Principal
from .scope.directory import TenantDirectory, TenantListRequest, TenantSummary
from .scope.store import SessionScope, SessionScopeStore

logger = logging.getLogger(__name__)


class AuthStatus(str, Enum):
    """Session resolution status."""

    IDLE = "idle"  # Nothing attempted yet
    LOADING = "loading"  # Verifying an existing session
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class ScopeContext:
    """Ambient principal + session scope, injected into consumers.

    Args:
        store: Scope store to own. A fresh one is created if omitted.
        directory: Tenant directory to signal on customer changes (optional).
        config: Package configuration (page size for directory requests).

    Auto-initialization runs in two places: explicitly in :meth:`sign_in`,
    and lazily before any derived value is returned while a principal is
    present and the scope is still EMPTY. It selects a customer at most
    once per signed-in principal: an explicit :meth:`clear_scope` is not
    undone by the next read.
    """

    def __init__(
        self,
        store: SessionScopeStore | None = None,
        directory: TenantDirectory | None = None,
        config: TenantScopeConfig | None = None,
    ) -> None:
        self._store = store or SessionScopeStore()
        self._directory = directory
        self._config = config or TenantScopeConfig()
        self._principal: Principal | None = None
        self._status = AuthStatus.IDLE
        self._auto_selected = False

    # ── Session lifecycle ───────────────────────────────

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def is_authenticated(self) -> bool:
        return self._status is AuthStatus.AUTHENTICATED and self._principal is not None

    @property
    def scope(self) -> SessionScope:
        """Snapshot of the selection as it stands, without auto-initialization."""
        return self._store.snapshot()

    def begin_session_check(self) -> None:
        """Mark the session as being verified (guards show a pending state)."""
        self._status = AuthStatus.LOADING

    def sign_in(self, principal: Principal | Mapping[str, Any]) -> Principal:
        """Install the principal for this session and auto-select a customer.

        Accepts a ``Principal`` or a raw user document, which is parsed via
        :meth:`Principal.from_payload`. Signing in as a different principal
        drops the previous selection first, so no scope carries over
        between identities.

        Raises:
            PrincipalValidationError: If a raw payload cannot be parsed.
        """
        if not isinstance(principal, Principal):
            principal = Principal.from_payload(principal)

        if self._principal is not None and self._principal.id != principal.id:
            logger.info("Principal changed %s -> %s; clearing scope", self._principal.id, principal.id)
            self._store.clear()
            self._auto_selected = False

        self._principal = principal
        self._status = AuthStatus.AUTHENTICATED
        logger.info("Signed in principal %s", principal.id)
        self._ensure_initialized()
        return principal

    def sign_out(self) -> None:
        """Drop the principal and clear the scope in one step."""
        principal_id = self._principal.id if self._principal else None
        self._principal = None
        self._store.clear()
        self._auto_selected = False
        self._status = AuthStatus.UNAUTHENTICATED
        logger.info("Signed out principal %s", principal_id)

    def _ensure_initialized(self) -> None:
        if self._principal is None or self._auto_selected or not self._store.is_empty:
            return
        if self._store.initialize_from_principal(self._principal):
            self._auto_selected = True
            self._request_tenants()

    def _request_tenants(self) -> None:
        customer_id = self._store.customer_id
        if self._directory is None or customer_id is None:
            return
        request = TenantListRequest(
            customer_id=customer_id,
            page=1,
            page_size=self._config.tenant_page_size,
        )
        logger.debug("Requesting tenants for customer %s", customer_id)
        self._directory.request_tenants(request)

    # ── Scope reads ─────────────────────────────────────

    def current_scope(self) -> SessionScope:
        """Snapshot of the selected customer/tenant."""
        self._ensure_initialized()
        return self._store.snapshot()

    # ── Platform ────────────────────────────────────────

    def is_super_admin(self) -> bool:
        return access.is_super_admin(self._principal)

    def has_platform_role(self, role: str) -> bool:
        return access.has_platform_role(self._principal, role)

    def is_admin(self) -> bool:
        """Super-admin or customer-admin of any customer."""
        return access.is_admin(self._principal)

    # ── Customer ────────────────────────────────────────

    def accessible_customer_ids(self) -> list[str]:
        return access.accessible_customer_ids(self._principal)

    def has_customer_access(self, customer_id: Any) -> bool:
        return access.has_customer_access(self._principal, customer_id)

    def current_customer_roles(self) -> frozenset[str]:
        """Roles held for the selected customer (empty if none selected)."""
        scope = self.current_scope()
        return access.customer_roles(self._principal, scope.customer_id)

    def has_current_customer_role(self, role: str) -> bool:
        scope = self.current_scope()
        return access.has_customer_role(self._principal, scope.customer_id, role)

    def has_current_customer_access(self) -> bool:
        scope = self.current_scope()
        return access.has_customer_access(self._principal, scope.customer_id)

    # ── Tenant ──────────────────────────────────────────

    def has_tenant_access(self, customer_id: Any, tenant_id: Any) -> bool:
        return access.has_tenant_access(self._principal, customer_id, tenant_id)

    def current_tenant_roles(self) -> frozenset[str]:
        """Roles held for the selected tenant (empty unless TENANT_SCOPED)."""
        scope = self.current_scope()
        return access.tenant_roles(self._principal, scope.customer_id, scope.tenant_id)

    def has_current_tenant_access(self) -> bool:
        scope = self.current_scope()
        return access.has_tenant_access(self._principal, scope.customer_id, scope.tenant_id)

    def current_accessible_tenant_ids(self) -> list[str]:
        """Tenants with a direct grant under the selected customer."""
        scope = self.current_scope()
        return access.accessible_tenant_ids(self._principal, scope.customer_id)

    def has_resource_access(self, resource_id: Any) -> bool:
        """Resource check against the selected customer and tenant."""
        scope = self.current_scope()
        return access.has_resource_access(self._principal, scope.customer_id, scope.tenant_id, resource_id)

    # ── Scope writes ────────────────────────────────────

    def switch_customer(self, customer_id: Any) -> bool:
        """Select a customer; signals the tenant directory if it changed.

        Returns:
            True if the selected customer changed.
        """
        changed = self._store.set_customer(customer_id)
        if changed:
            self._request_tenants()
        return changed

    def switch_tenant(self, tenant_id: Any, tenant_name: str | None = None) -> None:
        """Select a tenant (or ``None`` for all tenants) within the current customer."""
        self._store.set_tenant(tenant_id, tenant_name)

    def select_tenant(self, tenant: TenantSummary) -> None:
        """Select a tenant row from the directory.

        Raises:
            ScopePreconditionError: If the tenant is not ENABLED.
        """
        if not tenant.enabled:
            raise ScopePreconditionError(
                f"Tenant {tenant.id} is {tenant.status.value} and cannot be selected",
                tenant_id=tenant.id,
            )
        self._store.set_tenant(tenant.id, tenant.name)

    def clear_scope(self) -> None:
        self._store.clear()

    def __repr__(self) -> str:
        principal_id = self._principal.id if self._principal else None
        return f"ScopeContext(principal={principal_id!r}, status={self._status.value!r}, scope={self._store!r})"


__all__ = [
    "AuthStatus",
    "ScopeContext",
]
