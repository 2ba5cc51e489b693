"""
Course: learning material (title, description, content URL, thumbnail). Independent of quizzes.
"""
import uuid
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
