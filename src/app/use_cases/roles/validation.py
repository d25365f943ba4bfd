"""Shared input checks for role creation and update."""

from typing import Iterable, List, Optional, Tuple

from libs.result import Error
from src.domain.entities import ErrorCode, PermissionAction


def normalize_actions(actions: Iterable[str]) -> Tuple[Optional[List[str]], Optional[Error]]:
    actions = list(actions)
    if not actions:
        return None, Error(
            ErrorCode.VALIDATION_ERROR, "A role must grant at least one action"
        )
    allowed = {a.value for a in PermissionAction}
    unknown = sorted({str(a) for a in actions} - allowed)
    if unknown:
        return None, Error(
            ErrorCode.VALIDATION_ERROR,
            f"Unknown action(s): {', '.join(unknown)}. "
            f"Must be drawn from: {', '.join(a.value for a in PermissionAction)}",
        )
    return PermissionAction.ordered(actions), None


def normalize_name(name: Optional[str]) -> Tuple[Optional[str], Optional[Error]]:
    name = (name or "").strip()
    if not name:
        return None, Error(ErrorCode.VALIDATION_ERROR, "Role name must not be blank")
    return name, None


def duplicate_name_error(name: str) -> Error:
    return Error(
        ErrorCode.VALIDATION_ERROR,
        f"A role named '{name}' already exists in this organization",
    )
