"""Session scope: which customer/tenant the principal is operating within."""

from .directory import (
    PageMeta,
    TenantDirectory,
    TenantListRequest,
    TenantPage,
    TenantStatus,
    TenantSummary,
    eligible_tenants,
)
from .store import ScopeState, SessionScope, SessionScopeStore

__all__ = [
    "PageMeta",
    "ScopeState",
    "SessionScope",
    "SessionScopeStore",
    "TenantDirectory",
    "TenantListRequest",
    "TenantPage",
    "TenantStatus",
    "TenantSummary",
    "eligible_tenants",
]
