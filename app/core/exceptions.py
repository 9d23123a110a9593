"""Domain exceptions raised by the article operations and stores.

They carry no HTTP knowledge; ``app.main`` maps each one to a status code.
"""
from typing import Dict, List, Optional
from uuid import UUID


class NotFoundError(Exception):
    """Raised when an article id does not resolve."""

    def __init__(self, entity_type: str, entity_id: UUID):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class NotAuthorizedError(Exception):
    """Raised when the caller is neither the author nor an admin."""

    def __init__(self, user_id: Optional[UUID] = None, action: str = "modify"):
        self.user_id = user_id
        self.action = action
        super().__init__(f"User '{user_id}' is not allowed to {action} this article")


class ArticleValidationError(Exception):
    """Raised when required fields are missing or empty.

    ``errors`` maps each offending field to a human readable message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))

    def as_list(self) -> List[Dict[str, str]]:
        return [{"field": field, "message": msg} for field, msg in self.errors.items()]


class StoreError(Exception):
    """Raised when the underlying store fails. Never shown to API callers."""
