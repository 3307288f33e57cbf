import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.config import get_settings
from src.middleware import setup_middleware
from src.auth.router import router as auth_router
from src.ideas.router import router as ideas_router
from src.validation.router import router as validation_router
from src.generation.router import router as generation_router
from src.subscription.router import router as subscription_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    required = ["openai_api_key", "supabase_url", "supabase_service_key"]
    missing = [k for k in required if not getattr(settings, k)]
    if missing:
        logger.warning(f"Missing env vars: {missing}. Some features unavailable.")
    yield


app = FastAPI(
    title="NicheNavigator API",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    lifespan=lifespan,
)

setup_middleware(app, settings.frontend_url)

app.include_router(ideas_router, prefix="/api")
app.include_router(validation_router, prefix="/api")
app.include_router(generation_router, prefix="/api")
app.include_router(subscription_router, prefix="/api/subscription")
app.include_router(auth_router, prefix="/api/auth")


@app.get("/")
async def root():
    return {"status": "alive", "service": "niche-navigator-api"}


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "niche-navigator-api"}


@app.get("/health/detailed")
async def health_detailed():
    checks = {"api": "healthy"}
    checks["llm"] = "configured" if settings.openai_api_key else "missing"
    checks["supabase"] = (
        "configured" if settings.supabase_url and settings.supabase_service_key else "missing"
    )
    overall = "healthy" if all(v != "missing" for v in checks.values()) else "degraded"
    return {"status": overall, "checks": checks}
