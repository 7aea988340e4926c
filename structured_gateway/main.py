#!/usr/bin/env python3
"""Structured gateway application turning conversations into schema-shaped JSON."""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
import os
import time
import uuid
from typing import Any, Dict

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, unbind_contextvars
from structlog.stdlib import ProcessorFormatter

from .clients import GeminiClient
from .config import Settings, get_settings
from .exceptions import ProviderRequestError, ProviderResponseError
from .models import (
    GenerationRequest,
    Response,
    StructuredGenerateRequest,
    StructuredGenerateResponse,
)
from .structured import StructuredHandler
from .telemetry import (
    configure_tracing,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

SERVICE_NAME = "structured-gateway"

logger = logging.getLogger("structured_gateway")


class CorrelationIdFilter(logging.Filter):
    """Inject the correlation identifier into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - logging helper
        record.correlation_id = get_correlation_id() or "unknown"
        return True


def _add_correlation_id(_: Any, __: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:  # pragma: no cover - logging helper
    event_dict.setdefault("correlation_id", get_correlation_id() or "unknown")
    return event_dict


def _configure_otlp_logging(service_name: str) -> None:
    if not (
        os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        or os.getenv("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT")
    ):
        return

    root_logger = logging.getLogger()
    try:
        resource = Resource.create(
            {"service.name": os.getenv("OTEL_SERVICE_NAME", service_name)}
        )
        logger_provider = LoggerProvider(resource=resource)
        exporter = OTLPLogExporter()
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
        set_logger_provider(logger_provider)
        otlp_handler = LoggingHandler(level=logging.NOTSET, logger_provider=logger_provider)
        root_logger.addHandler(otlp_handler)
        root_logger.debug(
            "OTLP log exporter configured",
            extra={"service_name": resource.attributes.get("service.name")},
        )
    except Exception:  # pragma: no cover - exporter misconfiguration must not stop the app
        root_logger.exception("Failed to configure OTLP log exporter")


def configure_logging(service_name: str = SERVICE_NAME) -> None:
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        _add_correlation_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        structlog.processors.format_exc_info,
    ]

    formatter = ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(os.getenv("STRUCTURED_GATEWAY_LOG_LEVEL", "INFO").upper())

    structlog.configure(
        processors=shared_processors + [ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configure_otlp_logging(service_name)


configure_logging()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach correlation identifiers and latency to responses."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
        token = set_correlation_id(correlation_id)
        bind_contextvars(correlation_id=correlation_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled exception during request", extra={"path": request.url.path})
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            reset_correlation_id(token)
            unbind_contextvars("correlation_id")
            logger.info(
                "Request completed",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": round(duration_ms, 2),
                },
            )

        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time-ms"] = f"{duration_ms:.2f}"
        return response


app = FastAPI(title="Structured Gateway", version="0.1.0")
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)
configure_tracing(app, SERVICE_NAME)


# Dependency factories -----------------------------------------------------

def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    return GeminiClient.from_settings(settings)


# Routes -------------------------------------------------------------------


@app.get("/")
async def root() -> Dict[str, str]:
    return {"message": "Structured gateway operational"}


@app.get("/healthz")
async def healthz(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    """Simple readiness probe for container orchestrators."""

    return {"status": "ok", "gemini": "configured" if settings.gemini_api_key else "missing"}


@app.post("/structured/generate", response_model=StructuredGenerateResponse)
async def structured_generate(
    payload: StructuredGenerateRequest,
    gemini_client: GeminiClient = Depends(get_gemini_client),
    settings: Settings = Depends(get_settings),
) -> StructuredGenerateResponse:
    request = GenerationRequest(
        model=payload.model or settings.gemini_model,
        output_schema=payload.output_schema,
        messages=list(payload.messages),
        system_prompts=list(payload.system_prompts),
        temperature=payload.temperature,
        top_p=payload.top_p,
        max_tokens=payload.max_tokens,
        provider_meta=payload.provider_meta,
    )
    handler = StructuredHandler(gemini_client)

    try:
        result: Response = await asyncio.to_thread(handler.handle, request)
    except (ProviderRequestError, ProviderResponseError) as exc:
        logger.error("Structured generation failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return StructuredGenerateResponse(
        text=result.text,
        structured=result.structured,
        finish_reason=result.finish_reason,
        usage=result.usage,
        meta=result.meta,
        steps=len(result.steps),
    )
