"""Tenant directory contract.

The tenant list for the selected customer is fetched by an external,
paginated data-fetching collaborator. This module only defines the shapes
exchanged with it and the signal the scope facade sends:

    request  {customerId, page, pageSize}
    response {items: [{id, name, status}], meta: {page, pageSize, total}}

The collaborator owns transport, caching and its own loading flag; the
facade never waits for it.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..principal import canonical_id


class TenantStatus(str, Enum):
    """Lifecycle status of a tenant."""

    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


class TenantSummary(BaseModel):
    """One row of the tenant list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    status: TenantStatus = TenantStatus.ENABLED

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: object) -> str:
        ident = canonical_id(v)
        if ident is None:
            raise ValueError("tenant id is required")
        return ident

    @property
    def enabled(self) -> bool:
        return self.status is TenantStatus.ENABLED


class PageMeta(BaseModel):
    """Pagination block of a list response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: int = 1
    page_size: int = Field(default=20, validation_alias=AliasChoices("page_size", "pageSize"))
    total: int = 0
    total_pages: int = Field(default=0, validation_alias=AliasChoices("total_pages", "totalPages"))


class TenantPage(BaseModel):
    """A page of tenants for one customer."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: tuple[TenantSummary, ...] = Field(default=(), validation_alias=AliasChoices("items", "data"))
    meta: PageMeta = Field(default_factory=PageMeta)


class TenantListRequest(BaseModel):
    """Signal sent to the directory: "fetch tenants for this customer"."""

    model_config = ConfigDict(frozen=True)

    customer_id: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=100, ge=1)


@runtime_checkable
class TenantDirectory(Protocol):
    """External collaborator that loads tenant lists asynchronously."""

    def request_tenants(self, request: TenantListRequest) -> None:
        """Start (or reuse) a fetch for ``request``. Must not block."""
        ...


def eligible_tenants(page: TenantPage | None) -> list[TenantSummary]:
    """Tenants that may be selected: ``status == ENABLED`` only."""
    if page is None:
        return []
    return [tenant for tenant in page.items if tenant.enabled]


__all__ = [
    "PageMeta",
    "TenantDirectory",
    "TenantListRequest",
    "TenantPage",
    "TenantStatus",
    "TenantSummary",
    "eligible_tenants",
]
