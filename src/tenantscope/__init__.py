from .config import GuardConfig, LogLevel, TenantScopeConfig, load_config_from_env
from .exceptions import (
    ConfigurationError,
    InvalidIdentifierError,
    PrincipalValidationError,
    ScopePreconditionError,
    TenantScopeError,
)
from .facade import AuthStatus, ScopeContext
from .guard import (
    CustomerRoleRequirement,
    GuardDecision,
    GuardState,
    Navigator,
    RouteGuard,
    RouteRequirements,
    TenantRoleRequirement,
)
from .logging import (
    ScopeFormatter,
    ScopeLoggerAdapter,
    get_scope_logger,
    safe_preview,
    setup_logging,
)
from .permissions import (
    PRECEDENCE_CHAIN,
    ResourcePermissions,
    Roles,
    ScopeLevel,
    accessible_customer_ids,
    accessible_tenant_ids,
    customer_roles,
    has_customer_access,
    has_customer_role,
    has_platform_role,
    has_resource_access,
    has_resource_permission,
    has_tenant_access,
    has_tenant_role,
    is_admin,
    is_super_admin,
    platform_roles,
    resource_permissions,
    tenant_roles,
)
from .principal import CustomerGrant, PlatformGrant, Principal, ResourceGrant, TenantGrant, canonical_id
from .scope import (
    ScopeState,
    SessionScope,
    SessionScopeStore,
    TenantDirectory,
    TenantListRequest,
    TenantPage,
    TenantStatus,
    TenantSummary,
    eligible_tenants,
)

__all__ = [
    # Config
    'GuardConfig',
    'LogLevel',
    'TenantScopeConfig',
    'load_config_from_env',
    # Errors
    'ConfigurationError',
    'InvalidIdentifierError',
    'PrincipalValidationError',
    'ScopePreconditionError',
    'TenantScopeError',
    # Principal
    'CustomerGrant',
    'PlatformGrant',
    'Principal',
    'ResourceGrant',
    'TenantGrant',
    'canonical_id',
    # Resolver
    'PRECEDENCE_CHAIN',
    'ResourcePermissions',
    'Roles',
    'ScopeLevel',
    'accessible_customer_ids',
    'accessible_tenant_ids',
    'customer_roles',
    'has_customer_access',
    'has_customer_role',
    'has_platform_role',
    'has_resource_access',
    'has_resource_permission',
    'has_tenant_access',
    'has_tenant_role',
    'is_admin',
    'is_super_admin',
    'platform_roles',
    'resource_permissions',
    'tenant_roles',
    # Scope
    'ScopeState',
    'SessionScope',
    'SessionScopeStore',
    'TenantDirectory',
    'TenantListRequest',
    'TenantPage',
    'TenantStatus',
    'TenantSummary',
    'eligible_tenants',
    # Facade
    'AuthStatus',
    'ScopeContext',
    # Guard
    'CustomerRoleRequirement',
    'GuardDecision',
    'GuardState',
    'Navigator',
    'RouteGuard',
    'RouteRequirements',
    'TenantRoleRequirement',
    # Logging
    'ScopeFormatter',
    'ScopeLoggerAdapter',
    'get_scope_logger',
    'safe_preview',
    'setup_logging',
]
