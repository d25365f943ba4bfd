"""
Role Registry Use Cases

Creation, lookup, listing, update and deletion of organization roles.
"""

from .create_role_use_case import CreateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .dtos import DeleteRoleResponse, RoleListResponse, RoleResponse
from .get_role_use_case import GetRoleUseCase
from .list_roles_use_case import ListRolesUseCase
from .update_role_use_case import UpdateRoleUseCase

__all__ = [
    "CreateRoleUseCase",
    "DeleteRoleUseCase",
    "GetRoleUseCase",
    "ListRolesUseCase",
    "UpdateRoleUseCase",
    "DeleteRoleResponse",
    "RoleResponse",
    "RoleListResponse",
]
