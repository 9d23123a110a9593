from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

class NewsSchema(BaseModel):
    """Serialized with camelCase keys; accepts either case on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

# References resolved for display

class CategoryRef(NewsSchema):
    id: UUID
    name: str
    color: Optional[str] = None

class UserRef(NewsSchema):
    id: UUID
    name: str
    avatar: Optional[str] = None

# Comments

class Comment(NewsSchema):
    id: UUID = Field(default_factory=uuid4)
    user: UUID
    text: str
    created_at: datetime

class CommentDetail(NewsSchema):
    id: UUID
    user: Optional[UserRef] = None
    text: str
    created_at: datetime

class CommentCreate(NewsSchema):
    text: str

# Articles

# Column sizes of news.title and news.image
TITLE_MAX_LENGTH = 255
IMAGE_MAX_LENGTH = 2048

class ArticleBase(NewsSchema):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    excerpt: str
    content: str
    category: UUID
    image: str = Field(max_length=IMAGE_MAX_LENGTH)
    featured: bool = False

class ArticleCreate(ArticleBase):
    # Any "author" in the request body is ignored
    pass

class ArticleUpdate(NewsSchema):
    """Allow-listed patch: only these fields can ever be overwritten."""
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    category: Optional[UUID] = None
    image: Optional[str] = Field(default=None, max_length=IMAGE_MAX_LENGTH)
    featured: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }

class Article(ArticleBase):
    id: UUID
    author: UUID
    views: int = 0
    likes: List[UUID] = []
    comments: List[Comment] = []
    created_at: datetime
    updated_at: datetime

class ArticleDetail(NewsSchema):
    id: UUID
    title: str
    excerpt: str
    content: str
    category: Optional[CategoryRef] = None
    author: Optional[UserRef] = None
    image: str
    featured: bool = False
    views: int = 0
    likes: List[UUID] = []
    comments: List[CommentDetail] = []
    created_at: datetime
    updated_at: datetime

class ArticleList(NewsSchema):
    news: List[Article]
    current_page: int
    total_pages: int
    total_news: int

class ViewCount(NewsSchema):
    views: int

class LikeList(NewsSchema):
    likes: List[UUID]

class Message(BaseModel):
    message: str
