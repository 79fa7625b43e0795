"""Logfire setup for the comment service.

Comment operations open their own spans (comment_service.create,
comment_service.hard_delete, ...) and log through ``logfire`` directly:

    import logfire

    with logfire.span("comment_service.create", post_id=post_id):
        logfire.info("Comment created", comment_id=comment_id)

This module wires Logfire itself plus the FastAPI and SQLAlchemy
integrations those spans nest under.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.__version__ import VERSION
from discuss.config import Settings


def _should_send(settings: Settings) -> bool:
    """Explicit setting wins, then token presence."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Telemetry goes to Logfire cloud only when a token is present or sending
    is forced through OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)
    console = (
        logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        )
        if settings.observability.console
        else False
    )

    logfire.configure(
        service_name=settings.observability.service_name,
        service_version=VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=console,
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def _comment_request_attributes(request, attributes):
    """Tag request spans with the caller and the post being read.

    The x-user-id header is recorded as a span attribute instead of
    capturing every header.
    """
    result = {**attributes}
    result["method"] = getattr(request, "method", None)
    result["path"] = request.url.path

    user_id = request.headers.get("x-user-id")
    if user_id is not None:
        result["user_id"] = user_id

    post_id = request.query_params.get("post_id")
    if post_id is not None:
        result["post_id"] = post_id

    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_comment_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement, closure-table inserts and deletes included.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
