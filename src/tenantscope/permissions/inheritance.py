"""Precedence chain of the grant hierarchy.

Provides:
- ``PRECEDENCE_CHAIN`` — ordered (level, dominating role) rungs.
- ``dominating_rungs()`` — the rungs that imply access at a given level.

A rung's role, held at its level, implies access to every narrower
level beneath the same scope. A narrower grant never implies a broader
one. The access predicates in :mod:`tenantscope.permissions.access`
walk this table rather than spelling the chain out per call site.
"""

from __future__ import annotations

from typing import NamedTuple

from .constants import Roles, ScopeLevel


class Rung(NamedTuple):
    """One step of the precedence chain."""

    level: ScopeLevel
    role: str


# Broadest first: super-admin > customer-admin > tenant-admin > direct grant.
PRECEDENCE_CHAIN: tuple[Rung, ...] = (
    Rung(ScopeLevel.PLATFORM, Roles.SUPER_ADMIN),
    Rung(ScopeLevel.CUSTOMER, Roles.CUSTOMER_ADMIN),
    Rung(ScopeLevel.TENANT, Roles.TENANT_ADMIN),
)

_LEVEL_ORDER: tuple[ScopeLevel, ...] = (
    ScopeLevel.PLATFORM,
    ScopeLevel.CUSTOMER,
    ScopeLevel.TENANT,
    ScopeLevel.RESOURCE,
)


def dominating_rungs(level: ScopeLevel) -> tuple[Rung, ...]:
    """Return the rungs strictly broader than ``level``, broadest first.

    Example::

        >>> [r.role for r in dominating_rungs(ScopeLevel.TENANT)]
        ['SUPER_ADMIN', 'CUSTOMER_ADMIN']
        >>> dominating_rungs(ScopeLevel.PLATFORM)
        ()
    """
    depth = _LEVEL_ORDER.index(level)
    return tuple(rung for rung in PRECEDENCE_CHAIN if _LEVEL_ORDER.index(rung.level) < depth)


__all__ = [
    "PRECEDENCE_CHAIN",
    "Rung",
    "dominating_rungs",
]
