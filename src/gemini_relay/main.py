#!/usr/bin/env python3
"""
Gemini Relay main application.
This module builds the FastAPI application and sets up routes.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from gemini_relay import __version__
from gemini_relay.api.chat import create_router, validation_message
from gemini_relay.models.inference import ModelManager
from gemini_relay.utils.config import Settings
from gemini_relay.utils.project import setup_logging, print_startup_message

logger = logging.getLogger(__name__)

def create_app(
    model_manager: Optional[ModelManager] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        model_manager: Inference client to serve with; built from settings
            when omitted
        settings: Service settings; read from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    if settings is None:
        settings = Settings()
    if model_manager is None:
        model_manager = ModelManager.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Print the startup banner once the server is up."""
        print_startup_message(settings)
        yield

    app = FastAPI(
        title="Gemini Relay",
        description="Relays chat, image, audio and document requests to Gemini",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": validation_message(exc.errors())})

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include routers
    app.include_router(create_router(model_manager, settings.upload_dir), prefix="/api")

    # Serve the browser client; mounted last so /api routes match first
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="app")
    else:
        logger.warning(f"Static directory {settings.static_dir} not found, browser client disabled")

    return app

def main() -> None:
    settings = Settings()
    setup_logging(settings.log_level)
    # Fail before binding the port when the key is missing
    settings.require_api_key()
    uvicorn.run(
        "gemini_relay.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )

if __name__ == "__main__":
    main()
