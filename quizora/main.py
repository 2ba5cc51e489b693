"""
FastAPI application entrypoint.
Run with: uvicorn quizora.main:app --reload --port 8000  (or the `quizora` console script)

All routes are mounted under /api:
  - Auth:         POST /api/auth/register, POST /api/auth/login, GET /api/auth/me
  - Categories:   /api/categories (public reads, admin writes)
  - Courses:      /api/courses (public reads, admin writes)
  - Quizzes:      /api/quizzes, POST /api/quizzes/{id}/submit
  - Certificates: GET /api/certificates/my, GET /api/certificates/{id}, GET /api/certificates/{code}/download
  - Payments:     POST /api/payments/create-checkout-session, POST /api/payments/webhook, GET /api/payments/status
  - Chat:         POST /api/chat
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizora.config import settings
from quizora.api.errors import register_exception_handlers
from quizora.api.auth import router as auth_router
from quizora.api.categories import router as categories_router
from quizora.api.courses import router as courses_router
from quizora.api.quizzes import router as quizzes_router
from quizora.api.certificates import router as certificates_router
from quizora.api.payments import router as payments_router
from quizora.api.chat import router as chat_router

API_PREFIX = "/api"

app = FastAPI(
    title="Quizora API",
    description="Quiz learning platform: catalog, quiz attempts, certificates, payments and chat helper.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for _router in (
    auth_router,
    categories_router,
    courses_router,
    quizzes_router,
    certificates_router,
    payments_router,
    chat_router,
):
    app.include_router(_router, prefix=API_PREFIX)


@app.on_event("startup")
def startup():
    """Configure logging, check production config, create SQLite tables. Fail fast on bad production config."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    _log = logging.getLogger("quizora.main")
    if settings.is_production:
        if (settings.secret_key or "").strip() == "change-me-in-production":
            _log.critical("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
            raise RuntimeError("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
        if not settings.stripe_webhook_secret:
            _log.warning("STRIPE_WEBHOOK_SECRET is not set; every webhook will be rejected.")
    if settings.gemini_api_key:
        _log.info("Gemini: API key loaded. Chat helper enabled (model=%s).", settings.chat_model_name)
    else:
        _log.warning("Gemini: No API key. Set GEMINI_API_KEY in .env; chat requests will fail with 500.")
    if not settings.stripe_secret_key:
        _log.warning("Stripe: No secret key. Set STRIPE_SECRET_KEY in .env; checkout will fail with 500.")
    from quizora.database import init_sqlite_db
    init_sqlite_db()


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Quizora API"}


def main():
    """Console entrypoint: serve on PORT. A port already in use makes uvicorn exit non-zero."""
    import uvicorn
    uvicorn.run("quizora.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
