"""
Certificate schemas.
"""
from datetime import datetime
from uuid import UUID

from quizora.schemas.common import CamelModel


class CertificateResponse(CamelModel):
    id: UUID
    certificate_code: str
    user_id: UUID
    user_name: str | None = None
    quiz_id: UUID | None = None
    quiz_title: str | None = None
    category_id: UUID | None = None
    category_name: str | None = None
    score: float
    issue_date: datetime | None = None
