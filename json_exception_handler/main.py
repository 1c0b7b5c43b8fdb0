"""
Application entry point.

Creates a FastAPI application and wires together:
- Logging configuration
- The JSON exception interceptor with the default classification policy
- The health router

Run with ``uvicorn json_exception_handler.main:app``.
"""

from typing import Optional

from fastapi import FastAPI

from json_exception_handler.application.classifier import ClassificationHook
from json_exception_handler.application.policies import default_policy
from json_exception_handler.core.config import HandlerConfig, Settings, settings
from json_exception_handler.interfaces.health import router as health_router
from json_exception_handler.shared.errors.handlers import register_error_handlers
from json_exception_handler.shared.logging import configure_logging


def create_app(
    app_settings: Optional[Settings] = None,
    config: Optional[HandlerConfig] = None,
    classify: Optional[ClassificationHook] = default_policy,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root: the only place global settings are
    turned into the immutable interceptor configuration.

    Args:
        app_settings: Settings to use instead of the environment-loaded ones.
        config: Interceptor options overriding the ones derived from settings.
        classify: Classification hook for the interceptor.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(
        level=app_settings.log_level,
        include_tracebacks=app_settings.log_tracebacks,
    )

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
    )

    # --- Error Handling ---
    register_error_handlers(
        app,
        config=config if config is not None else app_settings.to_handler_config(),
        classify=classify,
    )

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")

    return app


app = create_app()
