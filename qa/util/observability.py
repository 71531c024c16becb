"""Observability configuration using Logfire.

Logfire provides structured logging with OpenTelemetry, tracing and
integrations for FastAPI and SQLAlchemy.

Usage:
    import logfire

    logfire.info("Vote applied", target_id=str(target_id), transition="up->none")

    with logfire.span("vote_service.apply_vote", target_type="answer"):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from qa.config import Settings


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    Priority: explicit setting > token presence > default (False).
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Development and test runs stay local unless a token is provided.
    Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending, or force it
    either way with OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": "qa-backend",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL queries, including the row locks taken by vote transactions.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
