"""
FastAPI Application Entry Point for Hold'em Engine.

This module creates and configures the FastAPI application with:
- HTTP routes mapping onto the engine's action API
- A handler turning engine errors into 400 responses
- CORS middleware for a local UI during development
"""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from holdem_engine import __version__
from holdem_engine.core.errors import PokerError
from holdem_engine.server.routes import router
from holdem_engine.server.schemas import error_body

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def poker_error_handler(request: Request, exc: PokerError) -> JSONResponse:
    """Reject illegal engine calls with the error class and message."""
    return JSONResponse(status_code=400, content=error_body(type(exc).__name__, exc))


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Hold'em Engine",
        description="Texas Hold'em rules engine with an HTTP action API",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PokerError, poker_error_handler)
    app.include_router(router)

    logger.info("Hold'em Engine app created")
    return app


# Create the application instance
app = create_app()
