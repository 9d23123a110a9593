from uuid import UUID

from pydantic import BaseModel

from app.models.user import ROLE_ADMIN

class Token(BaseModel):
    access_token: str
    token_type: str

class CurrentUser(BaseModel):
    """Identity extracted from a verified bearer token."""
    id: UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
