"""
Principal

Authenticated actor supplied by the identity provider. Not persisted.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .enums import PrincipalType


class Principal(BaseModel):
    """Caller identity: id and verified email as asserted by the identity provider"""

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    kind: PrincipalType = PrincipalType.user

    @property
    def normalized_email(self) -> str:
        return self.email.strip().lower()
