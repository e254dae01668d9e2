"""
Application principale FastAPI.

Ce module assemble les composants du service : conteneur de dépendances, middlewares, handlers
d'erreurs et routes.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI à partir d'un `Container` explicite
- Ajouter les middlewares (contexte de requête, rate limit GCRA, métriques)
- Monter les routers (versions, santé, métriques)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pyversions.api.routes_health import router as health_router
from pyversions.api.routes_versions import router as versions_router
from pyversions.apigw.errors import register_error_handlers
from pyversions.apigw.rate_limit import RateLimitMiddleware
from pyversions.app.metrics import PrometheusMiddleware, metrics_router
from pyversions.core.container import Container
from pyversions.core.logging import setup_logging
from pyversions.middlewares.request_context import RequestContextMiddleware


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Construit le conteneur si aucun n'est fourni (lit les settings, PORT requis)
    - Configure le logging structuré (structlog)
    - Ajoute les middlewares ; le rate limit s'applique avant les routes
    - Publie les routes de versions, de santé et de métriques
    """
    if container is None:
        container = Container()
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        container.close()

    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)
    app.state.container = container
    # Le dernier middleware ajouté est le plus externe.
    app.add_middleware(RateLimitMiddleware, limiter=container.limiter)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(versions_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    return app
