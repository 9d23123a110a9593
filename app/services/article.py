import logging
import math
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from app.core.exceptions import ArticleValidationError, NotAuthorizedError, NotFoundError
from app.schemas.article import (
    Article, ArticleCreate, ArticleDetail, ArticleList, ArticleUpdate, Comment
)
from app.schemas.auth import CurrentUser
from app.store.base import ArticleStore, utcnow

logger = logging.getLogger(__name__)

# Required text fields and the message reported when one is blank
REQUIRED_TEXT_FIELDS = {
    "title": "Title is required",
    "excerpt": "Excerpt is required",
    "content": "Content is required",
    "image": "Image URL is required",
}
UNKNOWN_CATEGORY = "Category not found"

class ArticleService:
    """
    Article operations: listing, lookup, authoring and engagement.

    Runs against an injected ``ArticleStore``; every method is a single
    read or read-modify-write of one article document.
    """

    def __init__(self, store: ArticleStore):
        self.store = store

    async def _get_or_404(self, article_id: UUID) -> Article:
        article = await self.store.get(article_id)
        if not article:
            raise NotFoundError("News", article_id)
        return article

    def _authorize(self, article: Article, caller: CurrentUser, action: str) -> None:
        if article.author != caller.id and not caller.is_admin:
            logger.warning(
                "User %s (role=%s) refused %s on article %s",
                caller.id, caller.role, action, article.id
            )
            raise NotAuthorizedError(caller.id, action)

    async def _check_category(self, category_id: UUID, errors: Dict[str, str]) -> None:
        if not await self.store.category_exists(category_id):
            errors["category"] = UNKNOWN_CATEGORY

    # Queries

    async def list_articles(
        self,
        page: int = 1,
        limit: int = 10,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> ArticleList:
        if search is not None:
            search = search.strip() or None

        skip = (page - 1) * limit
        total = await self.store.count(category=category, search=search)
        items = []
        # Pages past the end are answered without an OFFSET the database might reject
        if skip < total:
            items = await self.store.find(category=category, search=search, skip=skip, limit=limit)

        return ArticleList(
            news=items,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_news=total,
        )

    async def get_featured(self, limit: int = 5) -> List[Article]:
        return await self.store.find(featured=True, limit=limit)

    async def get_by_category(self, category_id: UUID) -> List[Article]:
        return await self.store.find(category=category_id)

    async def get_article(self, article_id: UUID) -> ArticleDetail:
        """Fetch a populated article, counting the read as a view."""
        if await self.store.increment_views(article_id) is None:
            raise NotFoundError("News", article_id)

        article = await self.store.get_detail(article_id)
        if not article:
            # Deleted between the two calls
            raise NotFoundError("News", article_id)
        return article

    # Authoring

    async def create_article(self, article_in: ArticleCreate, author_id: UUID) -> Article:
        errors = {
            field: message
            for field, message in REQUIRED_TEXT_FIELDS.items()
            if not getattr(article_in, field).strip()
        }
        await self._check_category(article_in.category, errors)
        if errors:
            raise ArticleValidationError(errors)

        now = utcnow()
        article = Article(
            id=uuid4(),
            title=article_in.title.strip(),
            excerpt=article_in.excerpt,
            content=article_in.content,
            category=article_in.category,
            author=author_id,
            image=article_in.image,
            featured=article_in.featured,
            created_at=now,
            updated_at=now,
        )
        created = await self.store.insert(article)
        logger.info("Created article %s by %s", created.id, author_id)
        return created

    async def update_article(
        self, article_id: UUID, article_in: ArticleUpdate, caller: CurrentUser
    ) -> Article:
        article = await self._get_or_404(article_id)
        self._authorize(article, caller, "update")

        changes = article_in.changes()
        errors = {
            field: message
            for field, message in REQUIRED_TEXT_FIELDS.items()
            if field in changes and not changes[field].strip()
        }
        if "category" in changes:
            await self._check_category(changes["category"], errors)
        if errors:
            raise ArticleValidationError(errors)
        if "title" in changes:
            changes["title"] = changes["title"].strip()

        updated = await self.store.save(article.model_copy(update=changes))
        if not updated:
            raise NotFoundError("News", article_id)
        logger.info("Updated article %s (%s) by %s", article_id, ", ".join(sorted(changes)), caller.id)
        return updated

    async def delete_article(self, article_id: UUID, caller: CurrentUser) -> None:
        article = await self._get_or_404(article_id)
        self._authorize(article, caller, "delete")

        if not await self.store.delete(article_id):
            raise NotFoundError("News", article_id)
        logger.info("Deleted article %s by %s", article_id, caller.id)

    # Engagement

    async def increment_views(self, article_id: UUID) -> int:
        views = await self.store.increment_views(article_id)
        if views is None:
            raise NotFoundError("News", article_id)
        return views

    async def toggle_like(self, article_id: UUID, user_id: UUID) -> List[UUID]:
        article = await self._get_or_404(article_id)

        if user_id in article.likes:
            likes = [liker for liker in article.likes if liker != user_id]
        else:
            likes = article.likes + [user_id]

        updated = await self.store.save(article.model_copy(update={"likes": likes}))
        if not updated:
            raise NotFoundError("News", article_id)
        return updated.likes

    async def add_comment(self, article_id: UUID, user_id: UUID, text: str) -> List[Comment]:
        if not text or not text.strip():
            raise ArticleValidationError({"text": "Text is required"})

        article = await self._get_or_404(article_id)
        comment = Comment(user=user_id, text=text, created_at=utcnow())

        updated = await self.store.save(
            article.model_copy(update={"comments": article.comments + [comment]})
        )
        if not updated:
            raise NotFoundError("News", article_id)
        return updated.comments
