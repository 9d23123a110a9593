from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import String, Text, Boolean, DateTime, Integer, ForeignKey, Index, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TSVECTOR, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.category import Category
from app.models.user import User

class Article(Base):
    """
    A news article stored as one row per document.

    Likes are a UUID array and comments an embedded JSONB array of
    ``{id, user, text, created_at}`` objects, so every read or write of an
    article touches a single row.
    """
    __tablename__ = "news"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )
    author_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    image: Mapped[str] = mapped_column(String(2048), nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    views: Mapped[int] = mapped_column(Integer, default=0)
    likes: Mapped[List[UUID]] = mapped_column(ARRAY(PG_UUID(as_uuid=True)), default=list)
    comments: Mapped[List[Dict[str, Any]]] = mapped_column(JSONB, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Maintained by the tsvectorupdate trigger (see migrations)
    search_vector: Mapped[Optional[str]] = mapped_column(TSVECTOR)

    category: Mapped[Optional[Category]] = relationship(Category, lazy="raise")
    author: Mapped[Optional[User]] = relationship(User, lazy="raise")

    __table_args__ = (
        Index('idx_news_search', 'search_vector', postgresql_using='gin'),
        Index('idx_news_category_created', 'category_id', 'created_at'),
    )
