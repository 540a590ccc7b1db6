"""Hirely.ai FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

import hirely.models  # noqa: F401  registers every table on Base.metadata
from hirely.config import settings
from hirely.database import engine, Base
from hirely.middleware.rate_limit import limiter
from hirely.routers import auth, resume, applications, interview, jd, shadow, market, profile, dashboard
from hirely.services.ai_client import ai_provider_name, ai_health_check

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create all tables on startup
Base.metadata.create_all(bind=engine)

_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="Hirely.ai",
    description="AI recruiting and career suite: resume morphing, interview battle plans, JD generation and mock interviews.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(resume.router)
app.include_router(applications.router)
app.include_router(interview.router)
app.include_router(jd.router)
app.include_router(shadow.router)
app.include_router(market.router)
app.include_router(profile.router)
app.include_router(dashboard.router)


@app.on_event("startup")
async def on_startup():
    provider = ai_provider_name()
    if provider == "none":
        logger.warning(
            "AI not configured: set GROQ_API_KEY (and optionally GROQ_MODEL) in backend/.env "
            "and restart. Visit /api/health/ai to verify."
        )
    else:
        logger.info("AI provider: %s", provider)


@app.get("/")
def root():
    return {
        "name": "Hirely.ai API",
        "version": "1.0.0",
        "docs": "/docs",
        "ai_provider": ai_provider_name(),
    }


@app.get("/health")
def health():
    return {"status": "ok", "ai_provider": ai_provider_name()}


@app.get("/api/health/ai")
async def health_ai():
    """Live connectivity test for the configured AI provider.

    Returns:
        provider: which AI is active
        status:   "ok" | "error" | "unconfigured"
        test_reply / error: result of a tiny test call
    """
    return await ai_health_check()
