"""Middleware Starlette posant le contexte de requête.

Ce module implémente un middleware qui :
- attribue un identifiant de requête (en-tête X-Request-ID, repris s'il est fourni)
- lie cet identifiant aux logs structlog pendant le traitement
- ajoute la durée de traitement en millisecondes (X-Process-Time-ms)
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

log = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Identifie, journalise et chronomètre chaque requête HTTP."""

    def __init__(
        self,
        app: ASGIApp,
        request_id_header: str = "X-Request-ID",
        timing_header: str = "X-Process-Time-ms",
    ) -> None:
        """Initialise le middleware.

        Args:
            app: Application ASGI à wrapper.
            request_id_header: Nom de l'en-tête portant l'ID de requête.
            timing_header: Nom de l'en-tête portant la durée de traitement.
        """
        super().__init__(app)
        self.request_id_header = request_id_header
        self.timing_header = timing_header

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.request_id_header) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            log.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=duration_ms,
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[self.request_id_header] = request_id
        response.headers[self.timing_header] = str(duration_ms)
        return response
