"""
Permission Resolution Use Cases

Access checks and grant management.
"""

from .assign_role_use_case import AssignRoleUseCase, build_grant
from .check_access_use_case import CheckAccessUseCase
from .check_org_access_use_case import CheckOrgAccessUseCase
from .dtos import (
    AccessDecision,
    EffectiveActionsResponse,
    GrantDetailResponse,
    OrgAccessResponse,
    PermissionListResponse,
    PermissionResponse,
    RevokePermissionResponse,
)
from .get_effective_actions_use_case import GetEffectiveActionsUseCase
from .list_permissions_use_case import ListPermissionsUseCase
from .revoke_permission_use_case import RevokePermissionUseCase

__all__ = [
    "AssignRoleUseCase",
    "CheckAccessUseCase",
    "CheckOrgAccessUseCase",
    "GetEffectiveActionsUseCase",
    "ListPermissionsUseCase",
    "RevokePermissionUseCase",
    "build_grant",
    "AccessDecision",
    "EffectiveActionsResponse",
    "GrantDetailResponse",
    "OrgAccessResponse",
    "PermissionListResponse",
    "PermissionResponse",
    "RevokePermissionResponse",
]
