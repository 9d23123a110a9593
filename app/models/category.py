from uuid import UUID, uuid4
from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

class Category(Base):
    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="bg-gray-500")

# Categories every deployment starts with, name -> badge color
DEFAULT_CATEGORIES = {
    "technology": "bg-purple-500",
    "business": "bg-green-500",
    "sports": "bg-orange-500",
    "health": "bg-red-500",
    "entertainment": "bg-teal-500",
}
