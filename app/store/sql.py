"""
PostgreSQL article store.

One ``news`` row per article. Search goes through the ``search_vector``
tsvector (title A, excerpt B, content C) maintained by a trigger; terms are
OR-ed so any matching word qualifies and ``ts_rank`` orders the hits.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, false, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import StoreError
from app.models.article import Article as ArticleModel
from app.models.category import Category
from app.models.user import User
from app.schemas.article import (
    Article, ArticleDetail, CategoryRef, Comment, CommentDetail, UserRef
)
from app.store.base import ArticleStore, search_terms


def _to_article(row: ArticleModel) -> Article:
    return Article(
        id=row.id,
        title=row.title,
        excerpt=row.excerpt,
        content=row.content,
        category=row.category_id,
        author=row.author_id,
        image=row.image,
        featured=row.featured,
        views=row.views,
        likes=list(row.likes or []),
        comments=[Comment.model_validate(c) for c in row.comments or []],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _comments_json(comments: List[Comment]) -> List[dict]:
    return [comment.model_dump(mode="json") for comment in comments]


class SQLArticleStore(ArticleStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _translate_errors(self) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreError(f"article store failure: {exc.__class__.__name__}") from exc

    def _conditions(
        self,
        category: Optional[UUID],
        search: Optional[str],
        featured: Optional[bool],
    ) -> Tuple[list, Optional[object]]:
        conditions = []
        ts_query = None
        if category is not None:
            conditions.append(ArticleModel.category_id == category)
        if featured is not None:
            conditions.append(ArticleModel.featured == featured)
        if search is not None:
            terms = search_terms(search)
            if not terms:
                conditions.append(false())
            else:
                # "term1 | term2": any term matches, like a document-store $text search
                ts_query = func.to_tsquery("english", " | ".join(terms))
                conditions.append(ArticleModel.search_vector.op("@@")(ts_query))
        return conditions, ts_query

    async def find(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Article]:
        conditions, ts_query = self._conditions(category, search, featured)
        query = select(ArticleModel).where(*conditions)

        if ts_query is not None:
            rank = func.ts_rank(ArticleModel.search_vector, ts_query)
            query = query.order_by(rank.desc(), ArticleModel.created_at.desc())
        else:
            query = query.order_by(ArticleModel.created_at.desc())

        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        async with self._translate_errors():
            result = await self.db.execute(query)
            return [_to_article(row) for row in result.scalars().all()]

    async def count(
        self,
        *,
        category: Optional[UUID] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> int:
        conditions, _ = self._conditions(category, search, featured)
        query = select(func.count()).select_from(ArticleModel).where(*conditions)
        async with self._translate_errors():
            total = await self.db.scalar(query)
        return total or 0

    async def category_exists(self, category_id: UUID) -> bool:
        async with self._translate_errors():
            found = await self.db.scalar(select(Category.id).where(Category.id == category_id))
        return found is not None

    async def get(self, article_id: UUID) -> Optional[Article]:
        async with self._translate_errors():
            row = await self.db.get(ArticleModel, article_id, populate_existing=True)
        return _to_article(row) if row else None

    async def get_detail(self, article_id: UUID) -> Optional[ArticleDetail]:
        async with self._translate_errors():
            result = await self.db.execute(
                select(ArticleModel)
                .options(selectinload(ArticleModel.category), selectinload(ArticleModel.author))
                .where(ArticleModel.id == article_id)
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()
            if not row:
                return None

            comments = [Comment.model_validate(c) for c in row.comments or []]
            user_ids = {comment.user for comment in comments}
            users = {}
            if user_ids:
                users_result = await self.db.execute(select(User).where(User.id.in_(user_ids)))
                users = {
                    user.id: UserRef.model_validate(user)
                    for user in users_result.scalars().all()
                }

        return ArticleDetail(
            id=row.id,
            title=row.title,
            excerpt=row.excerpt,
            content=row.content,
            category=CategoryRef.model_validate(row.category) if row.category else None,
            author=UserRef.model_validate(row.author) if row.author else None,
            image=row.image,
            featured=row.featured,
            views=row.views,
            likes=list(row.likes or []),
            comments=[
                CommentDetail(
                    id=comment.id,
                    user=users.get(comment.user),
                    text=comment.text,
                    created_at=comment.created_at,
                )
                for comment in comments
            ],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def insert(self, article: Article) -> Article:
        row = ArticleModel(
            id=article.id,
            title=article.title,
            excerpt=article.excerpt,
            content=article.content,
            category_id=article.category,
            author_id=article.author,
            image=article.image,
            featured=article.featured,
            views=article.views,
            likes=list(article.likes),
            comments=_comments_json(article.comments),
            created_at=article.created_at,
            updated_at=article.updated_at,
        )
        async with self._translate_errors():
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        return _to_article(row)

    async def save(self, article: Article) -> Optional[Article]:
        async with self._translate_errors():
            row = await self.db.get(ArticleModel, article.id)
            if row is None:
                return None

            # id, author_id, created_at and views are never written back
            row.title = article.title
            row.excerpt = article.excerpt
            row.content = article.content
            row.category_id = article.category
            row.image = article.image
            row.featured = article.featured
            row.likes = list(article.likes)
            row.comments = _comments_json(article.comments)
            row.updated_at = func.now()

            await self.db.commit()
            await self.db.refresh(row)
        return _to_article(row)

    async def delete(self, article_id: UUID) -> bool:
        async with self._translate_errors():
            result = await self.db.execute(delete(ArticleModel).where(ArticleModel.id == article_id))
            await self.db.commit()
        return result.rowcount > 0

    async def increment_views(self, article_id: UUID) -> Optional[int]:
        async with self._translate_errors():
            result = await self.db.execute(
                update(ArticleModel)
                .where(ArticleModel.id == article_id)
                .values(views=ArticleModel.views + 1)
                .returning(ArticleModel.views)
            )
            views = result.scalar_one_or_none()
            await self.db.commit()
        return views
