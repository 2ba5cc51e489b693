"""
Payments API: Stripe Checkout session, webhook (raw body, signature-verified), purchase status.
The webhook acknowledges every verified event with 200 so Stripe does not retry; processing
failures are logged only.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from quizora.database import get_db
from quizora.models.quiz import Quiz
from quizora.models.user import User
from quizora.schemas.payment import CheckoutRequest, CheckoutResponse, PaymentStatusResponse, WebhookAck
from quizora.api.deps import get_current_user
from quizora.services.payments import (
    PaymentGatewayError,
    StripeGateway,
    WebhookVerificationError,
    get_payment_gateway,
    handle_webhook_event,
)

router = APIRouter(prefix="/payments", tags=["payments"])
logger = logging.getLogger(__name__)


@router.post("/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(
    data: CheckoutRequest,
    current_user: User = Depends(get_current_user),
    gateway: StripeGateway = Depends(get_payment_gateway),
    db: Session = Depends(get_db),
):
    """Start a hosted Checkout for one quiz; returns the session id and redirect URL."""
    if data.quiz_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="quizId is required")
    if not db.query(Quiz.id).filter(Quiz.id == data.quiz_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    if any(q.id == data.quiz_id for q in current_user.purchased_quizzes):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Quiz already purchased")
    try:
        session = gateway.create_checkout_session(current_user.id, data.quiz_id, customer_email=current_user.email)
    except PaymentGatewayError as e:
        logger.error("Stripe checkout failed user_id=%s quiz_id=%s: %s", current_user.id, data.quiz_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Payment service is currently unavailable",
        )
    logger.info("Checkout session %s created user_id=%s quiz_id=%s", session["id"], current_user.id, data.quiz_id)
    return CheckoutResponse(**session)


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    gateway: StripeGateway = Depends(get_payment_gateway),
    db: Session = Depends(get_db),
):
    """Stripe webhook. Needs the raw body bytes for signature verification."""
    payload = await request.body()
    try:
        event = await run_in_threadpool(gateway.verify_webhook, payload, stripe_signature)
    except WebhookVerificationError as e:
        logger.warning("Stripe webhook signature verification failed: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Webhook Error: {e}")
    await run_in_threadpool(_apply_event, db, event)
    return WebhookAck(received=True)


def _apply_event(db: Session, event: dict) -> None:
    """Blocking DB work for a verified event; failures are logged and rolled back, never raised."""
    try:
        handle_webhook_event(db, event)
    except Exception:
        db.rollback()
        logger.exception("Stripe webhook: processing failed for event %s", event.get("id"))


@router.get("/status", response_model=PaymentStatusResponse)
def payment_status(
    quiz_id: UUID | None = Query(default=None, alias="quizId"),
    current_user: User = Depends(get_current_user),
):
    """Whether the user bought the given quiz (or any quiz), plus all purchased quiz ids."""
    purchased = [q.id for q in current_user.purchased_quizzes]
    paid = quiz_id in purchased if quiz_id is not None else bool(purchased)
    return PaymentStatusResponse(paid=paid, purchased_quizzes=purchased)
