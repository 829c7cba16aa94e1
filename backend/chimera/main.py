"""
Project Chimera Backend - FastAPI Application Entry Point
"""

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chimera import __version__, config
from chimera.api import game, generate


def setup_logging() -> None:
    """Configure console logging once for the whole process."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root_logger.addHandler(handler)
    root_logger.setLevel(config.get_log_level())

    # Keep LiteLLM and its HTTP stack quiet
    logging.getLogger("litellm").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


setup_logging()

app = FastAPI(
    title="Project Chimera",
    description="LLM-driven narrative game backend",
    version=__version__,
)

# Permissive CORS so any static frontend can call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS", "POST"],
    allow_headers=config.DEFAULT_CORS_HEADERS,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 rather than 422"""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body."},
    )


app.include_router(game.router, prefix="/api", tags=["game"])
app.include_router(generate.router, prefix="/api", tags=["generate"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "name": "Project Chimera", "version": __version__}
