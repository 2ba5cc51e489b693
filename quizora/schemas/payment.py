"""
Payment schemas.
"""
from uuid import UUID

from quizora.schemas.common import CamelModel


class CheckoutRequest(CamelModel):
    # Optional at the schema level so a missing quizId gets its own 400 message
    quiz_id: UUID | None = None


class CheckoutResponse(CamelModel):
    id: str
    url: str | None = None


class PaymentStatusResponse(CamelModel):
    paid: bool
    purchased_quizzes: list[UUID]


class WebhookAck(CamelModel):
    received: bool = True
