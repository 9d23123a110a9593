"""
In-process article store.

Keeps documents in a dict and mimics the PostgreSQL store closely enough for
tests and local demos: newest-first ordering, weighted term matching for
search, and copies on every read and write so callers never share state with
the store.
"""
import itertools
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from app.schemas.article import Article, ArticleDetail, CategoryRef, CommentDetail, UserRef
from app.store.base import ArticleStore, search_terms, utcnow

# Same weighting idea as the tsvector setweight A/B/C
_FIELD_WEIGHTS = (("title", 3), ("excerpt", 2), ("content", 1))


def _relevance(article: Article, terms: List[str]) -> int:
    score = 0
    for field, weight in _FIELD_WEIGHTS:
        text = getattr(article, field).lower()
        for term in terms:
            score += text.count(term) * weight
    return score


class MemoryArticleStore(ArticleStore):

    def __init__(self):
        self._articles: Dict[UUID, Article] = {}
        self._inserted: Dict[UUID, int] = {}
        self._sequence = itertools.count()
        self.users: Dict[UUID, UserRef] = {}
        self.categories: Dict[UUID, CategoryRef] = {}

    def add_user(self, user: UserRef) -> None:
        self.users[user.id] = user

    def add_category(self, category: CategoryRef) -> None:
        self.categories[category.id] = category

    def _matching(
        self,
        category: Optional[UUID],
        search: Optional[str],
        featured: Optional[bool],
    ) -> List[Tuple[int, Article]]:
        terms = search_terms(search) if search is not None else None
        matches = []
        for article in self._articles.values():
            if category is not None and article.category != category:
                continue
            if featured is not None and article.featured != featured:
                continue
            score = 0
            if terms is not None:
                score = _relevance(article, terms)
                if score == 0:
                    continue
            matches.append((score, article))
        return matches

    async def find(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Article]:
        matches = self._matching(category, search, featured)
        matches.sort(
            key=lambda m: (m[0], m[1].created_at, self._inserted[m[1].id]),
            reverse=True,
        )
        window = matches[skip:] if limit is None else matches[skip:skip + limit]
        return [article.model_copy(deep=True) for _, article in window]

    async def count(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> int:
        return len(self._matching(category, search, featured))

    async def category_exists(self, category_id: UUID) -> bool:
        return category_id in self.categories

    async def get(self, article_id: UUID) -> Optional[Article]:
        article = self._articles.get(article_id)
        return article.model_copy(deep=True) if article else None

    async def get_detail(self, article_id: UUID) -> Optional[ArticleDetail]:
        article = self._articles.get(article_id)
        if not article:
            return None

        return ArticleDetail(
            id=article.id,
            title=article.title,
            excerpt=article.excerpt,
            content=article.content,
            category=self.categories.get(article.category),
            author=self.users.get(article.author),
            image=article.image,
            featured=article.featured,
            views=article.views,
            likes=list(article.likes),
            comments=[
                CommentDetail(
                    id=comment.id,
                    user=self.users.get(comment.user),
                    text=comment.text,
                    created_at=comment.created_at,
                )
                for comment in article.comments
            ],
            created_at=article.created_at,
            updated_at=article.updated_at,
        )

    async def insert(self, article: Article) -> Article:
        self._articles[article.id] = article.model_copy(deep=True)
        self._inserted[article.id] = next(self._sequence)
        return article.model_copy(deep=True)

    async def save(self, article: Article) -> Optional[Article]:
        if article.id not in self._articles:
            return None
        stored = article.model_copy(
            update={"views": self._articles[article.id].views, "updated_at": utcnow()},
            deep=True,
        )
        self._articles[article.id] = stored
        return stored.model_copy(deep=True)

    async def delete(self, article_id: UUID) -> bool:
        if self._articles.pop(article_id, None) is None:
            return False
        del self._inserted[article_id]
        return True

    async def increment_views(self, article_id: UUID) -> Optional[int]:
        article = self._articles.get(article_id)
        if not article:
            return None
        article.views += 1
        article.updated_at = utcnow()
        return article.views
