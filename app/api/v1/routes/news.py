from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.v1 import dependencies
from app.config import settings
from app.schemas.article import (
    Article,
    ArticleCreate,
    ArticleDetail,
    ArticleList,
    ArticleUpdate,
    Comment,
    CommentCreate,
    LikeList,
    Message,
    ViewCount,
)
from app.schemas.auth import CurrentUser
from app.services.article import ArticleService

router = APIRouter()


def _positive_int(raw: Optional[str], default: int) -> int:
    """Parse a query value, falling back to ``default`` when absent, non-numeric or < 1."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default

# Public Endpoints

@router.get("", response_model=ArticleList)
async def list_news(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    category: Optional[UUID] = None,
    search: Optional[str] = None,
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    """
    List news newest-first, optionally filtered by category and text search.
    """
    per_page = min(_positive_int(limit, settings.NEWS_PER_PAGE), settings.NEWS_MAX_PER_PAGE)
    return await service.list_articles(
        page=_positive_int(page, 1),
        limit=per_page,
        category=category,
        search=search,
    )

@router.get("/featured", response_model=List[Article])
async def featured_news(
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    return await service.get_featured(limit=settings.FEATURED_NEWS_LIMIT)

@router.get("/category/{category_id}", response_model=List[Article])
async def news_by_category(
    category_id: UUID,
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    return await service.get_by_category(category_id)

@router.get("/{article_id}", response_model=ArticleDetail)
async def get_news(
    article_id: UUID,
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    """
    Get a news article with category, author and commenters resolved.
    Each call counts as a view.
    """
    return await service.get_article(article_id)

@router.post("/{article_id}/view", response_model=ViewCount)
async def increment_view(
    article_id: UUID,
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    views = await service.increment_views(article_id)
    return {"views": views}

# Authenticated Endpoints

@router.post("", response_model=Article, status_code=status.HTTP_201_CREATED)
async def create_news(
    article_in: ArticleCreate,
    current_user: CurrentUser = Depends(dependencies.get_current_user),
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    """
    Create a news article authored by the caller.
    """
    return await service.create_article(article_in, author_id=current_user.id)

@router.put("/{article_id}", response_model=Article)
@router.patch("/{article_id}", response_model=Article)
async def update_news(
    article_id: UUID,
    article_in: ArticleUpdate,
    current_user: CurrentUser = Depends(dependencies.get_current_user),
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    """
    Update a news article. Only its author or an admin may do so.
    """
    return await service.update_article(article_id, article_in, caller=current_user)

@router.delete("/{article_id}", response_model=Message)
async def delete_news(
    article_id: UUID,
    current_user: CurrentUser = Depends(dependencies.get_current_user),
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    """
    Delete a news article. Only its author or an admin may do so.
    """
    await service.delete_article(article_id, caller=current_user)
    return {"message": "News deleted"}

@router.post("/{article_id}/like", response_model=LikeList)
async def toggle_like(
    article_id: UUID,
    current_user: CurrentUser = Depends(dependencies.get_current_user),
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    likes = await service.toggle_like(article_id, current_user.id)
    return {"likes": likes}

@router.post("/{article_id}/comment", response_model=List[Comment])
async def add_comment(
    article_id: UUID,
    comment_in: CommentCreate,
    current_user: CurrentUser = Depends(dependencies.get_current_user),
    service: ArticleService = Depends(dependencies.get_article_service)
) -> Any:
    return await service.add_comment(article_id, current_user.id, comment_in.text)
