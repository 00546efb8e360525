"""
Context RAG service entry point.

Builds the FastAPI application: observability middleware, CORS for the
configured origins, and the versioned API router. Startup configures
logging and wires the orchestrator so provider clients are built before the
first search arrives; shutdown drops the cached services and their indexes.

Dependencies: fastapi, uvicorn, context_rag.api, context_rag.configs, context_rag.observability
System role: ASGI application and console entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from context_rag import __version__
from context_rag.api import api_router
from context_rag.api.deps import get_service_cache
from context_rag.configs import get_settings
from context_rag.observability.logger import configure_logging
from context_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Provider SDKs read GOOGLE_API_KEY / OPENAI_API_KEY from os.environ, not from Settings
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)

    cache = get_service_cache()
    orchestrator = cache.orchestrator
    contexts = [record.id for record in cache.repository.list()]
    logger.info(
        f"{__name__}:lifespan - Ready ({settings.environment}): strategy={orchestrator.strategy.name} "
        f"top_k={orchestrator.top_k} contexts={contexts}"
    )

    yield

    cache.clear()
    logger.info(f"{__name__}:lifespan - Services released")


def create_app() -> FastAPI:
    """
    Assemble the application.

    Middleware runs outermost-last-added: CORS, then correlation binding,
    then request logging, so every request log line carries its ID.

    Returns:
        FastAPI: Application with all routes under /api/v1
    """
    settings = get_settings()
    app = FastAPI(
        title="Context RAG API",
        description="Question answering over the documents registered to each context",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()


def run() -> None:
    """Console script: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "context_rag.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
