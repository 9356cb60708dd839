"""Logfire configuration and library instrumentation.

Every service operation opens a span named ``<service>.<operation>``
carrying the page or comment it works on, for example:

    with logfire.span("thread_cache.get", page_id=page_id):
        ...

Structured events use ``logfire.info/warn/error`` with keyword fields.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from chatter.config import Settings

# Path parameters copied onto request spans
_TRACED_PATH_PARAMS = ("page_id", "comment_id")


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once at process start.

    Telemetry is sent to Logfire cloud when OBSERVABILITY__SEND_TO_LOGFIRE
    says so, or else when OBSERVABILITY__LOGFIRE_TOKEN is set. Without
    either, spans and events go to the console only.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name="chatter",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
            min_log_level="debug" if settings.debug else "info",
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request except health checks.

    Request spans carry the page or comment ID from the path and the
    client address, which identifies anonymous commenters.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        result = {**attributes}
        path_params = getattr(request, "path_params", None) or {}
        for name in _TRACED_PATH_PARAMS:
            if name in path_params:
                result[name] = path_params[name]
        client = getattr(request, "client", None)
        if client:
            result["client_host"] = client.host
        return result

    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace record store queries."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace notification webhook calls and edge purges."""
    logfire.instrument_httpx()


def instrument_redis() -> None:
    """Trace thread cache commands."""
    logfire.instrument_redis()
