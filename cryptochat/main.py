import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import chat, health, prices
from .config import settings
from .dependencies import Services, build_services
from .errors import ChatError
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "services", None) is None:
        settings.ensure_required()
        app.state.services = build_services(settings)
        logger.info("Chat services initialized with model %s", settings.llm_model)
    yield


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "An internal server error occurred."})


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI application.

    Passing ``services`` skips the startup wiring, which is how tests inject
    fake market data and model clients.
    """
    app = FastAPI(
        title="Crypto Chat API",
        description="Chat backend for crypto prices, stats and a simulated portfolio",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatError, chat_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(chat.router, tags=["Chat"])
    app.include_router(prices.router, tags=["Prices"])
    return app


app = create_app()


def run() -> None:
    """Console entry point: validate configuration and serve with uvicorn."""
    import uvicorn

    setup_logging()
    settings.ensure_required()
    uvicorn.run(
        "cryptochat.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
