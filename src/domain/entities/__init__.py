"""
Access Core Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ErrorCode,
    InvitationStatus,
    ObjectType,
    PermissionAction,
    PrincipalType,
)

# Export all entities
from .organization import Organization
from .workspace import Workspace
from .role import Role
from .permission import Permission
from .invitation import Invitation
from .audit_event import AuditEvent
from .principal import Principal

__all__ = [
    # Enums
    "ErrorCode",
    "InvitationStatus",
    "ObjectType",
    "PermissionAction",
    "PrincipalType",
    # Entities
    "Organization",
    "Workspace",
    "Role",
    "Permission",
    "Invitation",
    "AuditEvent",
    "Principal",
]
