"""Session scope store: the currently selected customer and tenant.

Provides:
- ``ScopeState`` — EMPTY / CUSTOMER_SCOPED / TENANT_SCOPED.
- ``SessionScope`` — immutable snapshot of the selection.
- ``SessionScopeStore`` — single-writer state machine with four transitions.

The selection is what the principal is currently *looking at*, not what
it is *entitled to*; entitlement lives in :mod:`tenantscope.permissions`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..exceptions import InvalidIdentifierError, ScopePreconditionError
from ..permissions.constants import Roles
from ..principal import Principal, canonical_id

logger = logging.getLogger(__name__)


class ScopeState(str, Enum):
    """Conceptual states of the session scope."""

    EMPTY = "empty"  # No customer selected
    CUSTOMER_SCOPED = "customer_scoped"  # Customer selected, all tenants
    TENANT_SCOPED = "tenant_scoped"  # Customer and one tenant selected


class SessionScope(BaseModel):
    """Snapshot of the selected scope."""

    model_config = ConfigDict(frozen=True)

    customer_id: str | None = None
    tenant_id: str | None = None
    tenant_name: str | None = None

    @property
    def state(self) -> ScopeState:
        if self.customer_id is None:
            return ScopeState.EMPTY
        if self.tenant_id is None:
            return ScopeState.CUSTOMER_SCOPED
        return ScopeState.TENANT_SCOPED


class SessionScopeStore:
    """Owns the selected customer/tenant for one session.

    The four transitions below are the only write path; the fields are
    exposed read-only. Every transition validates its input before
    touching state, so a rejected call leaves the scope unchanged.

    Transitions:
        ``set_customer``              any state → CUSTOMER_SCOPED (no-op if same customer)
        ``set_tenant``                CUSTOMER_SCOPED | TENANT_SCOPED → either
        ``initialize_from_principal`` EMPTY → CUSTOMER_SCOPED, once, if a customer-admin grant exists
        ``clear``                     any state → EMPTY

    Example::

        store = SessionScopeStore()
        store.initialize_from_principal(principal)  # picks first CUSTOMER_ADMIN grant
        store.set_tenant("T1", "Acme Tenant")
        store.set_customer("B")                     # tenant cleared
    """

    __slots__ = ("_customer_id", "_tenant_id", "_tenant_name")

    def __init__(self) -> None:
        self._customer_id: str | None = None
        self._tenant_id: str | None = None
        self._tenant_name: str | None = None

    # ── Read side ───────────────────────────────────────

    @property
    def customer_id(self) -> str | None:
        return self._customer_id

    @property
    def tenant_id(self) -> str | None:
        return self._tenant_id

    @property
    def tenant_name(self) -> str | None:
        return self._tenant_name

    @property
    def state(self) -> ScopeState:
        return self.snapshot().state

    @property
    def is_empty(self) -> bool:
        return self._customer_id is None

    def snapshot(self) -> SessionScope:
        """Immutable copy of the current selection."""
        return SessionScope(
            customer_id=self._customer_id,
            tenant_id=self._tenant_id,
            tenant_name=self._tenant_name,
        )

    # ── Transitions ─────────────────────────────────────

    def set_customer(self, customer_id: Any) -> bool:
        """Select a customer.

        A different customer clears the tenant selection; the same customer
        (by canonical id) is a no-op and keeps the tenant.

        Returns:
            True if the selected customer changed.

        Raises:
            InvalidIdentifierError: If ``customer_id`` is missing or malformed.
                Use :meth:`clear` to deselect.
        """
        cid = canonical_id(customer_id)
        if cid is None:
            raise InvalidIdentifierError("customer_id is required; use clear() to deselect")

        if cid == self._customer_id:
            return False

        previous = self._customer_id
        self._customer_id = cid
        self._tenant_id = None
        self._tenant_name = None
        logger.debug("Scope customer %s -> %s (tenant cleared)", previous, cid)
        return True

    def set_tenant(self, tenant_id: Any, tenant_name: str | None = None) -> None:
        """Select a tenant within the current customer.

        ``tenant_id=None`` means "all tenants" and clears the name too.

        Raises:
            ScopePreconditionError: If no customer is selected.
            InvalidIdentifierError: If ``tenant_id`` is empty or malformed, or
                ``tenant_name`` is not a string.
        """
        if self._customer_id is None:
            raise ScopePreconditionError(
                "Cannot select a tenant before a customer is selected",
                tenant_id=repr(tenant_id),
            )

        tid = None
        if tenant_id is not None:
            tid = canonical_id(tenant_id)
            if tid is None:
                raise InvalidIdentifierError("tenant_id is empty; pass None to select all tenants")
        if tenant_name is not None and not isinstance(tenant_name, str):
            raise InvalidIdentifierError(
                f"tenant_name must be a string, got {type(tenant_name).__name__}",
            )

        self._tenant_id = tid
        self._tenant_name = tenant_name if tid is not None else None
        logger.debug("Scope tenant -> %s under customer %s", tid or "<all>", self._customer_id)

    def initialize_from_principal(self, principal: Principal | None) -> bool:
        """Auto-select the principal's first customer-admin customer.

        Only acts from EMPTY. Scans customer grants in stored order and
        selects the first one carrying ``CUSTOMER_ADMIN``. Otherwise stays
        EMPTY. Safe to call repeatedly: once a customer is selected every
        later call is a no-op, whatever principal it is given.

        Returns:
            True if a customer was selected by this call.
        """
        if self._customer_id is not None or not isinstance(principal, Principal):
            return False

        grant = next(
            (g for g in principal.customer_grants if Roles.CUSTOMER_ADMIN in g.roles),
            None,
        )
        if grant is None:
            logger.debug("No customer-admin grant for principal %s; scope stays empty", principal.id)
            return False

        self._customer_id = grant.customer_id
        self._tenant_id = None
        self._tenant_name = None
        logger.info("Scope initialized to customer %s for principal %s", grant.customer_id, principal.id)
        return True

    def clear(self) -> None:
        """Reset to EMPTY unconditionally."""
        self._customer_id = None
        self._tenant_id = None
        self._tenant_name = None
        logger.debug("Scope cleared")

    def __repr__(self) -> str:
        return (
            f"SessionScopeStore(customer_id={self._customer_id!r}, "
            f"tenant_id={self._tenant_id!r}, tenant_name={self._tenant_name!r})"
        )


__all__ = [
    "ScopeState",
    "SessionScope",
    "SessionScopeStore",
]
