"""
Article store interface.

A store is the injected handle the article operations run against. It offers
document-style primitives only: no authorization, no validation. Writes
replace the whole document (last write wins), except ``increment_views``
which must be atomic.
"""
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from app.schemas.article import Article, ArticleDetail

_WORD = re.compile(r"\w+", re.UNICODE)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def search_terms(text: str) -> List[str]:
    """Split free text into lowercase search terms, dropping punctuation."""
    return [term.lower() for term in _WORD.findall(text)]


class ArticleStore(ABC):

    @abstractmethod
    async def find(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Article]:
        """
        Return matching articles.

        Ordered newest-first; with ``search`` ordered by relevance first and
        newest-first among equals. A search with no usable terms matches
        nothing.
        """

    @abstractmethod
    async def count(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> int:
        ...

    @abstractmethod
    async def category_exists(self, category_id: UUID) -> bool:
        ...

    @abstractmethod
    async def get(self, article_id: UUID) -> Optional[Article]:
        ...

    @abstractmethod
    async def get_detail(self, article_id: UUID) -> Optional[ArticleDetail]:
        """Return the article with category, author and comment users resolved."""

    @abstractmethod
    async def insert(self, article: Article) -> Article:
        """Persist a new article as given."""

    @abstractmethod
    async def save(self, article: Article) -> Optional[Article]:
        """
        Overwrite a stored article and bump its ``updated_at``.

        ``views`` is left as stored; only ``increment_views`` changes it.

        Returns None when it no longer exists.
        """

    @abstractmethod
    async def delete(self, article_id: UUID) -> bool:
        ...

    @abstractmethod
    async def increment_views(self, article_id: UUID) -> Optional[int]:
        """Add one view and return the new count, or None when missing."""
