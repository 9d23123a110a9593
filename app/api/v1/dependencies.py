from typing import AsyncIterator
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import ValidationError

from app.config import settings
from app.core.security import ALGORITHM
from app.database import AsyncSessionLocal
from app.schemas.auth import CurrentUser
from app.services.article import ArticleService
from app.store.base import ArticleStore
from app.store.sql import SQLArticleStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

async def get_article_store(request: Request) -> AsyncIterator[ArticleStore]:
    """
    Yield the store for one request.

    An in-process store built at startup lives on ``app.state``; otherwise
    each request gets a PostgreSQL store over its own session.
    """
    store = getattr(request.app.state, "article_store", None)
    if store is not None:
        yield store
        return
    async with AsyncSessionLocal() as db:
        yield SQLArticleStore(db)

async def get_article_service(store: ArticleStore = Depends(get_article_store)) -> ArticleService:
    return ArticleService(store)

async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """
    Resolve the caller from a bearer token.

    The token is trusted as issued by /api/auth/login: ``sub`` holds the user
    id and ``role`` the caller's role. No database round trip.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
        return CurrentUser(id=UUID(subject), role=payload.get("role", "user"))
    except (JWTError, ValidationError, ValueError):
        raise credentials_exception
