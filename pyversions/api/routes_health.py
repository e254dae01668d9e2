"""
Endpoint de santé pour vérifier la disponibilité de l'API.

N'effectue aucun appel amont : `/health` ne consomme pas le quota des pages python.org.
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    """Vérifie la disponibilité de l'API."""
    settings = request.app.state.container.settings
    return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}
