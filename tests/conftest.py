"""Shared fixtures for tenantscope tests."""

from __future__ import annotations

from typing import Callable, Iterable
from unittest.mock import MagicMock

import pytest
from tenantscope import Principal, ScopeContext, TenantDirectory


def _build_principal(
    *,
    principal_id: str = "u-1",
    platform: Iterable[Iterable[str]] = (),
    customers: Iterable[tuple[str, Iterable[str]]] = (),
    tenants: Iterable[tuple[str, str, Iterable[str]]] = (),
    resources: Iterable[tuple[str, str, str, Iterable[str]]] = (),
) -> Principal:
    return Principal(
        id=principal_id,
        display_name=f"User {principal_id}",
        platform_grants=[{"roles": list(roles)} for roles in platform],
        customer_grants=[{"customer_id": c, "roles": list(roles)} for c, roles in customers],
        tenant_grants=[{"customer_id": c, "tenant_id": t, "roles": list(roles)} for c, t, roles in tenants],
        resource_grants=[
            {"customer_id": c, "tenant_id": t, "resource_id": r, "permissions": list(perms)}
            for c, t, r, perms in resources
        ],
    )


@pytest.fixture
def make_principal() -> Callable[..., Principal]:
    """Factory for principals from compact grant tuples."""
    return _build_principal


@pytest.fixture
def directory() -> MagicMock:
    """Tenant directory double that records request signals."""
    return MagicMock(spec=TenantDirectory)


@pytest.fixture
def context(directory: MagicMock) -> ScopeContext:
    return ScopeContext(directory=directory)
