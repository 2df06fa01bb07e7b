"""Exception hierarchy for tenantscope.

All errors raised by the package inherit from TenantScopeError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to error classes

Access denials are never exceptions: the resolver and the scope store
report "no" as a return value. Only misuse surfaces here.

Usage:
    from tenantscope.exceptions import ScopePreconditionError

    try:
        store.set_tenant("T1", "Acme")
    except ScopePreconditionError as e:
        logger.error("scope misuse: %s", e.message, extra={"error_code": e.code})
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "TenantScopeError",
    "ConfigurationError",
    "PrincipalValidationError",
    "InvalidIdentifierError",
    "ScopePreconditionError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class TenantScopeError(Exception):
    """Base exception for tenantscope.

    Attributes:
        code: Stable error code string (e.g. "SCOPE_PRECONDITION").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(TenantScopeError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class PrincipalValidationError(TenantScopeError, ValueError):
    """A principal payload could not be parsed into the typed grant model."""

    code: str = "PRINCIPAL_INVALID"
    message: str = "Principal payload is malformed"


class InvalidIdentifierError(TenantScopeError, ValueError):
    """A scope mutator received an identifier that has no canonical form."""

    code: str = "INVALID_IDENTIFIER"
    message: str = "Identifier is malformed"


class ScopePreconditionError(TenantScopeError, ValueError):
    """A scope transition was requested from a state that does not allow it."""

    code: str = "SCOPE_PRECONDITION"
    message: str = "Scope transition precondition not met"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[TenantScopeError])


class ErrorRegistry:
    """Registry for mapping stable error codes to error classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[TenantScopeError]] = {}

    def register(self, code: str, error_cls: type[TenantScopeError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[TenantScopeError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[TenantScopeError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("TENANT_LOCKED")
        class TenantLockedError(TenantScopeError):
            code = "TENANT_LOCKED"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", TenantScopeError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("PRINCIPAL_INVALID", PrincipalValidationError)
error_registry.register("INVALID_IDENTIFIER", InvalidIdentifierError)
error_registry.register("SCOPE_PRECONDITION", ScopePreconditionError)
