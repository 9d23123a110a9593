import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.routes import auth, news
from app.config import settings
from app.core.exceptions import (
    ArticleValidationError, NotAuthorizedError, NotFoundError, StoreError
)
from app.core.logging import setup_logging
from app.database import engine
from app.models.category import DEFAULT_CATEGORIES
from app.schemas.article import CategoryRef
from app.store.memory import MemoryArticleStore

logger = logging.getLogger(__name__)


def build_memory_store() -> MemoryArticleStore:
    store = MemoryArticleStore()
    for name, color in DEFAULT_CATEGORIES.items():
        store.add_category(CategoryRef(id=uuid4(), name=name, color=color))
    logger.info(
        "In-memory store categories: %s",
        ", ".join(f"{c.name}={c.id}" for c in store.categories.values())
    )
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    logger.info("Starting news API (store=%s, env=%s)", settings.STORE_BACKEND, settings.ENVIRONMENT)
    if settings.STORE_BACKEND == "memory":
        app.state.article_store = build_memory_store()
    yield
    app.state.article_store = None
    await engine.dispose()


app = FastAPI(
    title="News API",
    description="Publish, browse and discuss news articles.",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error mapping

@app.exception_handler(ArticleValidationError)
async def article_validation_handler(request: Request, exc: ArticleValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": exc.as_list()},
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        # loc is ("body", "title"), ("query", "category"), ("path", "article_id")...
        field = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        errors.append({"field": field, "message": error["msg"]})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )

@app.exception_handler(NotAuthorizedError)
async def not_authorized_handler(request: Request, exc: NotAuthorizedError):
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"message": "Not authorized"})

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "News not found"})

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )

# API Routes
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(news.router, prefix="/api/news", tags=["news"])

@app.get("/health")
async def health_check():
    return {"status": "ok"}
