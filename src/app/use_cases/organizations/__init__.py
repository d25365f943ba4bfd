"""
Onboarding Use Cases

Organization and workspace creation.
"""

from .create_organization_use_case import CreateOrganizationUseCase
from .create_workspace_use_case import CreateWorkspaceUseCase
from .dtos import OrganizationResponse, WorkspaceResponse

__all__ = [
    "CreateOrganizationUseCase",
    "CreateWorkspaceUseCase",
    "OrganizationResponse",
    "WorkspaceResponse",
]
