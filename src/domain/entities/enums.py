"""
Access Core Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class PrincipalType(str, Enum):
    """Kind of actor that can hold grants"""

    user = "user"


class ObjectType(str, Enum):
    """Scope a grant or an access check targets"""

    organization = "organization"
    workspace = "workspace"


class PermissionAction(str, Enum):
    """Closed vocabulary of actions a role may bundle"""

    read = "read"
    write = "write"
    invite = "invite"
    manage = "manage"
    admin = "admin"

    @classmethod
    def ordered(cls, actions) -> list[str]:
        """De-duplicate and sort action values in vocabulary order."""
        wanted = {cls(a) for a in actions}
        return [a.value for a in cls if a in wanted]


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    revoked = "revoked"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.pending


class ErrorCode(str, Enum):
    """Error codes returned by use cases"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"
    INVITATION_EXPIRED = "INVITATION_EXPIRED"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    INVALID_STATE = "INVALID_STATE"
    UNAVAILABLE = "UNAVAILABLE"
