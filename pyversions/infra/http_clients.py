"""Clients HTTP externes (pages de téléchargement python.org).

Objectif du module
------------------
- Encapsuler les appels réseau vers les pages listant les versions.
- Convertir toute erreur de transport ou de statut en `FetchError`.
"""

from __future__ import annotations

import httpx
import structlog

from pyversions.domain.errors import FetchError

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "pyversions/0.1 (+https://www.python.org/downloads/)"


class PageFetcher:
    """Récupère le HTML d'une page via un `httpx.Client` partagé."""

    def __init__(
        self,
        timeout_s: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None:
            timeout = httpx.Timeout(timeout_s)
            limits = httpx.Limits(max_keepalive_connections=4, max_connections=10)
            client = httpx.Client(
                headers={"User-Agent": user_agent},
                timeout=timeout,
                limits=limits,
                follow_redirects=True,
            )
        self._client = client

    def fetch(self, url: str) -> str:
        """Effectue un GET et retourne le corps décodé.

        Lève `FetchError` si la requête échoue ou si le statut est >= 400.
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            log.warning("fetch_bad_status", url=url, status_code=code)
            raise FetchError(url, f"HTTP {code}", status_code=code) from exc
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", url=url, error=str(exc), error_type=type(exc).__name__)
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        return response.text

    def close(self) -> None:
        self._client.close()
