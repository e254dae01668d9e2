"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une enveloppe d'erreur commune, des codes d'erreur cohérents et les handlers
qui traduisent les erreurs du domaine (récupération, parsing) en réponses HTTP. Aucune erreur de
traitement de requête ne termine le processus.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from pyversions.domain.errors import FetchError, VersionParseError

log = structlog.get_logger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class ErrorCodes:
    """Standard error codes for the API."""

    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_FETCH_FAILED = "UPSTREAM_FETCH_FAILED"
    VERSION_PARSE_FAILED = "VERSION_PARSE_FAILED"


HTTP_ERROR_CODES = {
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    429: ErrorCodes.RATE_LIMITED,
    500: ErrorCodes.INTERNAL_ERROR,
}


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Retourne l'identifiant de requête posé par le middleware, sinon l'en-tête X-Request-ID."""
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get("X-Request-ID")


def handle_fetch_error(request: Request, exc: FetchError) -> JSONResponse:
    """Échec de récupération de la page amont: 500, le processus continue."""
    log.error(
        "upstream_fetch_failed",
        url=exc.url,
        reason=exc.reason,
        upstream_status=exc.status_code,
        path=request.url.path,
    )
    details: dict[str, Any] = {"url": exc.url}
    if exc.status_code is not None:
        details["upstream_status"] = exc.status_code
    return create_error_response(
        status_code=500,
        code=ErrorCodes.UPSTREAM_FETCH_FAILED,
        message="Failed to fetch the upstream listing page",
        trace_id=extract_trace_id(request),
        details=details,
    )


def handle_version_parse_error(request: Request, exc: VersionParseError) -> JSONResponse:
    """Candidat extrait mais non interprétable: invariant interne violé, 500."""
    log.error("version_parse_failed", text=exc.text, reason=exc.reason, path=request.url.path)
    return create_error_response(
        status_code=500,
        code=ErrorCodes.VERSION_PARSE_FAILED,
        message="A matched version candidate could not be parsed",
        trace_id=extract_trace_id(request),
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle routing and HTTP exceptions (404, 405...) with standard envelope."""
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    response = create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs du domaine sur l'application."""
    app.add_exception_handler(FetchError, handle_fetch_error)  # type: ignore[arg-type]
    app.add_exception_handler(VersionParseError, handle_version_parse_error)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, handle_http_exception)  # type: ignore[arg-type]
