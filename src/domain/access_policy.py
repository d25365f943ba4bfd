"""
Access Policy

Pure matching rules of the permission resolution engine. The hierarchy is
fixed at two levels: an organization and its workspaces.
"""

from typing import Iterable, Mapping, Optional
from uuid import UUID

from src.domain.entities import ObjectType, Permission, PermissionAction, Role


def grant_matches(grant: Permission, object_type: ObjectType, object_id: UUID) -> bool:
    """
    Decide whether a grant covers the requested object.

    - An org-wide grant covers the organization and every workspace in it
    - A workspace grant covers exactly that workspace, never a sibling and
      never the organization itself

    The caller has already restricted grants to the object's organization.
    """
    if grant.object_type == ObjectType.organization:
        return True
    return object_type == ObjectType.workspace and grant.object_id == object_id


def matching_grants(
    grants: Iterable[Permission], object_type: ObjectType, object_id: UUID
) -> list[Permission]:
    return [g for g in grants if grant_matches(g, object_type, object_id)]


def effective_actions(
    grants: Iterable[Permission], roles: Mapping[UUID, Role], org_id: UUID
) -> set[PermissionAction]:
    """
    Union of the actions of every role behind the given grants.

    Roles missing from the mapping or owned by another organization
    contribute nothing.
    """
    actions: set[PermissionAction] = set()
    for grant in grants:
        role: Optional[Role] = roles.get(grant.role_id)
        if role is None or role.org_id != org_id:
            continue
        for action in role.actions:
            actions.add(PermissionAction(action))
    return actions


def is_granted(
    grants: Iterable[Permission],
    roles: Mapping[UUID, Role],
    org_id: UUID,
    action: PermissionAction,
) -> bool:
    # Default deny: no matching permissive grant means no access
    return action in effective_actions(grants, roles, org_id)
