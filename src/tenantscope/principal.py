"""Principal model: an authenticated actor and its full grant set.

Provides:
- ``canonical_id()`` — stable string form used for every identifier comparison.
- ``PlatformGrant`` / ``CustomerGrant`` / ``TenantGrant`` / ``ResourceGrant``.
- ``Principal`` — immutable, typed grant set; ``Principal.from_payload()``
  parses the backend's user document once, at the trust boundary.

Everything downstream (resolver, scope store, guard) assumes a validated
``Principal`` and never re-inspects raw payloads.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidIdentifierError, PrincipalValidationError


def canonical_id(value: Any) -> str | None:
    """Return the canonical string form of an identifier.

    ``None`` and empty values map to ``None``. Strings, numbers and objects
    with a meaningful ``str()`` (e.g. ObjectId) map to ``str(value)``, so
    ``ObjectId("A")`` and ``"A"`` compare equal.

    Raises:
        InvalidIdentifierError: For containers and booleans, which have no
            stable identifier form.
    """
    if value is None:
        return None
    if isinstance(value, bool) or isinstance(value, (Mapping, list, tuple, set, frozenset)):
        raise InvalidIdentifierError(f"Not an identifier: {type(value).__name__}", value=repr(value))
    text = str(value)
    return text or None


def _required_id(value: Any) -> str:
    try:
        ident = canonical_id(value)
    except InvalidIdentifierError as e:
        raise ValueError(e.message) from None
    if ident is None:
        raise ValueError("identifier is required")
    return ident


def _string_set(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        raise ValueError("expected a collection of strings, got a bare string")
    return frozenset(str(item) for item in value)


class _Grant(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("roles", "permissions", mode="before", check_fields=False)
    @classmethod
    def validate_string_set(cls, v: Any) -> frozenset[str]:
        return _string_set(v)

    @field_validator("customer_id", "tenant_id", "resource_id", mode="before", check_fields=False)
    @classmethod
    def validate_identifier(cls, v: Any) -> str:
        return _required_id(v)


class PlatformGrant(_Grant):
    """Platform-scope grant (no customer)."""

    roles: frozenset[str] = Field(default_factory=frozenset)


class CustomerGrant(_Grant):
    """Roles held for one customer."""

    customer_id: str = Field(validation_alias=AliasChoices("customer_id", "customerId"))
    roles: frozenset[str] = Field(default_factory=frozenset)


class TenantGrant(_Grant):
    """Roles held for one (customer, tenant) pair."""

    customer_id: str = Field(validation_alias=AliasChoices("customer_id", "customerId"))
    tenant_id: str = Field(validation_alias=AliasChoices("tenant_id", "tenantId"))
    roles: frozenset[str] = Field(default_factory=frozenset)


class ResourceGrant(_Grant):
    """Permissions held on one resource (VMF) under a tenant.

    Permissions are independent of roles: ``READ`` here says nothing about
    the principal's tenant role and vice versa.
    """

    customer_id: str = Field(validation_alias=AliasChoices("customer_id", "customerId"))
    tenant_id: str = Field(validation_alias=AliasChoices("tenant_id", "tenantId"))
    resource_id: str = Field(validation_alias=AliasChoices("resource_id", "resourceId", "vmfId"))
    permissions: frozenset[str] = Field(default_factory=frozenset)


class Principal(BaseModel):
    """An authenticated actor and its grants.

    Immutable once built. A new sign-in produces a new ``Principal``; the
    old one is never mutated. Grant tuples keep the order the backend sent
    them in, since several lookups resolve duplicates by first match.

    Example::

        principal = Principal.from_payload({
            "id": "u-1",
            "name": "Ada",
            "memberships": [
                {"customerId": None, "roles": ["SUPER_ADMIN"]},
                {"customerId": "A", "roles": ["CUSTOMER_ADMIN"]},
            ],
            "tenantMemberships": [{"customerId": "A", "tenantId": "T1", "roles": ["TENANT_ADMIN"]}],
            "vmfGrants": [],
        })
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    display_name: str = Field(default="", alias="displayName")
    is_active: bool = Field(default=True, alias="isActive")

    platform_grants: tuple[PlatformGrant, ...] = Field(default=(), alias="platformGrants")
    customer_grants: tuple[CustomerGrant, ...] = Field(default=(), alias="customerGrants")
    tenant_grants: tuple[TenantGrant, ...] = Field(default=(), alias="tenantGrants")
    resource_grants: tuple[ResourceGrant, ...] = Field(default=(), alias="resourceGrants")

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> str:
        return _required_id(v)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Principal:
        """Parse a backend user document into a ``Principal``.

        Accepted shape (camelCase as sent by the API; snake_case also works)::

            {
              "id" | "_id": ...,
              "name" | "displayName" | "email": ...,
              "isActive": bool,
              "memberships":       [{"customerId": id | null, "roles": [...]}],
              "tenantMemberships": [{"customerId", "tenantId", "roles": [...]}],
              "vmfGrants":         [{"customerId", "tenantId", "vmfId", "permissions": [...]}],
            }

        Memberships with a null ``customerId`` are platform grants; the rest
        are customer grants. Stored order is preserved.

        Raises:
            PrincipalValidationError: If the payload cannot be parsed.
        """
        if not isinstance(data, Mapping):
            raise PrincipalValidationError(f"Expected a mapping, got {type(data).__name__}")

        def _pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        platform: list[dict[str, Any]] = []
        customer: list[dict[str, Any]] = []
        memberships = _pick("memberships", default=())
        if not isinstance(memberships, (list, tuple)):
            raise PrincipalValidationError("memberships must be a list", memberships=repr(memberships))
        for membership in memberships:
            if not isinstance(membership, Mapping):
                raise PrincipalValidationError("Membership entries must be mappings", entry=repr(membership))
            customer_id = membership.get("customerId", membership.get("customer_id"))
            if customer_id is None:
                platform.append({"roles": membership.get("roles")})
            else:
                customer.append({"customerId": customer_id, "roles": membership.get("roles")})

        try:
            return cls(
                id=_pick("id", "_id"),
                display_name=str(_pick("displayName", "display_name", "name", "email", default="")),
                is_active=_pick("isActive", "is_active", default=True),
                platform_grants=platform,
                customer_grants=customer,
                tenant_grants=_pick("tenantMemberships", "tenant_grants", default=()),
                resource_grants=_pick("vmfGrants", "resource_grants", default=()),
            )
        except ValidationError as e:
            raise PrincipalValidationError(
                f"Principal payload is malformed ({e.error_count()} error(s))",
                errors=e.errors(include_url=False),
            ) from e


__all__ = [
    "CustomerGrant",
    "PlatformGrant",
    "Principal",
    "ResourceGrant",
    "TenantGrant",
    "canonical_id",
]
