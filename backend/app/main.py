from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.routers import chat, providers
from app.services.llm.registry import get_registry


settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: build the provider registry once
    registry = get_registry()
    available = [p.display_name for p in registry.list_providers() if p.available]
    if available:
        logger.info("AI providers available: %s", ", ".join(available))
    else:
        logger.warning("No AI provider credentials configured; chat will use offline fallback")
    yield
    # Shutdown: close pooled provider connections
    await registry.aclose()


app = FastAPI(
    title="GeoPolitics AI API",
    description="Multi-provider AI assistant for the geopolitics dashboard",
    version="1.0.0",
    lifespan=lifespan,
)
# Avoid 307 redirects for trailing slash (e.g. /chat/ -> /chat) that can cause redirect loops behind nginx
app.router.redirect_slashes = False

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:5173",
        "http://localhost",
        "http://127.0.0.1",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(chat.router, prefix="/chat", tags=["Chat"])
app.include_router(providers.router, prefix="/providers", tags=["Providers"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
