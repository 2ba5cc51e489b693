"""
Stripe payment flow: hosted Checkout sessions and webhook reconciliation.
The gateway is built once per process from settings (get_payment_gateway) and injected into routes.
A completed checkout grants the quiz to the user (add-to-set on user_purchased_quizzes).
"""
import logging
from functools import lru_cache
from uuid import UUID

import stripe
from sqlalchemy.orm import Session

from quizora.config import settings
from quizora.models.quiz import Quiz
from quizora.models.user import User

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class PaymentGatewayError(Exception):
    """Stripe call failed or Stripe is not configured."""


class WebhookVerificationError(Exception):
    """Webhook payload or signature did not verify."""


class StripeGateway:
    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        client_url: str,
        amount_cents: int,
        currency: str,
        product_name: str,
    ) -> None:
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._client_url = client_url
        self._amount_cents = amount_cents
        self._currency = currency
        self._product_name = product_name

    def create_checkout_session(self, user_id: UUID, quiz_id: UUID, customer_email: str | None = None) -> dict:
        """Create a hosted Checkout session for one quiz; metadata binds it to (userId, quizId)."""
        if not self._secret_key:
            raise PaymentGatewayError("STRIPE_SECRET_KEY is not set")
        params = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self._currency,
                        "product_data": {"name": self._product_name},
                        "unit_amount": self._amount_cents,
                    },
                    "quantity": 1,
                }
            ],
            "success_url": f"{self._client_url}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{self._client_url}/payment-cancel",
            "client_reference_id": str(user_id),
            "metadata": {"userId": str(user_id), "quizId": str(quiz_id)},
        }
        if customer_email:
            params["customer_email"] = customer_email
        try:
            session = stripe.checkout.Session.create(api_key=self._secret_key, **params)
        except stripe.StripeError as e:
            raise PaymentGatewayError(str(e)) from e
        return {"id": session.id, "url": session.url}

    def verify_webhook(self, payload: bytes, signature: str | None) -> dict:
        """Verify Stripe-Signature over the raw body; return the event as a plain dict."""
        if not signature:
            raise WebhookVerificationError("Missing Stripe-Signature header")
        if not self._webhook_secret:
            raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET is not set")
        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            raise WebhookVerificationError(str(e)) from e
        return event.to_dict()


@lru_cache
def get_payment_gateway() -> StripeGateway:
    """Dependency: process-wide Stripe gateway."""
    return StripeGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        client_url=settings.client_url,
        amount_cents=settings.checkout_amount_cents,
        currency=settings.checkout_currency,
        product_name=settings.checkout_product_name,
    )


def grant_quiz_access(db: Session, user_id: UUID, quiz_id: UUID) -> bool:
    """Add quiz_id to the user's purchased quizzes. Returns False when already granted."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise LookupError(f"User not found: {user_id}")
    quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
    if not quiz:
        raise LookupError(f"Quiz not found: {quiz_id}")
    if any(q.id == quiz.id for q in user.purchased_quizzes):
        return False
    user.purchased_quizzes.append(quiz)
    db.commit()
    return True


def handle_webhook_event(db: Session, event: dict) -> None:
    """Apply a verified Stripe event. Only checkout.session.completed changes state."""
    event_type = event.get("type")
    if event_type != CHECKOUT_COMPLETED:
        logger.info("Stripe webhook: ignored event %s", event_type)
        return
    session = (event.get("data") or {}).get("object") or {}
    metadata = session.get("metadata") or {}
    user_raw = metadata.get("userId") or session.get("client_reference_id")
    quiz_raw = metadata.get("quizId")
    if not user_raw or not quiz_raw:
        logger.warning("Stripe webhook: %s without userId/quizId metadata; skipping", session.get("id"))
        return
    granted = grant_quiz_access(db, UUID(str(user_raw)), UUID(str(quiz_raw)))
    if granted:
        logger.info("Stripe webhook: quiz %s granted to user %s", quiz_raw, user_raw)
    else:
        logger.info("Stripe webhook: quiz %s already granted to user %s", quiz_raw, user_raw)
