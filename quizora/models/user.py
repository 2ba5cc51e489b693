"""
User model: auth (email + bcrypt hash), role (user | admin).
Purchased quizzes live in user_purchased_quizzes; the composite primary key makes a grant an add-to-set.
"""
import uuid
from sqlalchemy import Column, ForeignKey, String, Table, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType

ROLE_USER = "user"
ROLE_ADMIN = "admin"

user_purchased_quizzes = Table(
    "user_purchased_quizzes",
    Base.metadata,
    Column("user_id", UuidType(), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("quiz_id", UuidType(), ForeignKey("quizzes.id", ondelete="CASCADE"), primary_key=True),
)


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_USER)  # user | admin

    __table_args__ = (CheckConstraint("role IN ('user', 'admin')", name="users_role_check"),)

    purchased_quizzes = relationship(
        "Quiz", secondary=user_purchased_quizzes, back_populates="purchasers", lazy="selectin"
    )
    certificates = relationship("Certificate", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
