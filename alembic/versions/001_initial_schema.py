"""Initial schema: users, entitlements, categories, courses, quizzes, questions, certificates.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Ids are UUID strings (quizora.models.types.UuidType)
_ID = sa.String(36)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", _ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        *_timestamps(),
        sa.CheckConstraint("role IN ('user', 'admin')", name="users_role_check"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "test_categories",
        sa.Column("id", _ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_test_categories_name", "test_categories", ["name"], unique=True)

    op.create_table(
        "courses",
        sa.Column("id", _ID, nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content_url", sa.String(1024), nullable=True),
        sa.Column("thumbnail", sa.String(1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "quizzes",
        sa.Column("id", _ID, nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("passing_score", sa.Float(), nullable=False, server_default="70"),
        sa.Column("total_points", sa.Integer(), nullable=False),
        sa.Column("time_limit", sa.Integer(), nullable=True),
        sa.Column("category_id", _ID, nullable=False),
        sa.Column("creator_id", _ID, nullable=True),
        *_timestamps(),
        sa.CheckConstraint("passing_score >= 0 AND passing_score <= 100", name="quizzes_passing_score_check"),
        sa.ForeignKeyConstraint(["category_id"], ["test_categories.id"]),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_quizzes_category_id", "quizzes", ["category_id"], unique=False)

    op.create_table(
        "questions",
        sa.Column("id", _ID, nullable=False),
        sa.Column("quiz_id", _ID, nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer_index", sa.Integer(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_quiz_id", "questions", ["quiz_id"], unique=False)

    op.create_table(
        "user_purchased_quizzes",
        sa.Column("user_id", _ID, nullable=False),
        sa.Column("quiz_id", _ID, nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "quiz_id"),
    )

    op.create_table(
        "certificates",
        sa.Column("id", _ID, nullable=False),
        sa.Column("user_id", _ID, nullable=False),
        sa.Column("category_id", _ID, nullable=True),
        sa.Column("quiz_id", _ID, nullable=True),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("issue_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("certificate_code", sa.String(32), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["test_categories.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("user_id", "quiz_id", name="certificates_user_quiz_key"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_certificates_user_id", "certificates", ["user_id"], unique=False)
    op.create_index("ix_certificates_quiz_id", "certificates", ["quiz_id"], unique=False)
    op.create_index("ix_certificates_certificate_code", "certificates", ["certificate_code"], unique=True)


def downgrade() -> None:
    op.drop_table("certificates")
    op.drop_table("user_purchased_quizzes")
    op.drop_table("questions")
    op.drop_table("quizzes")
    op.drop_table("courses")
    op.drop_table("test_categories")
    op.drop_table("users")
