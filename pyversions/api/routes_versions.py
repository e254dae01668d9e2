"""
Routes exposant les dernières versions de Python.

- `GET /python-stable` : plus haute version de la première colonne de la page des sources
- `GET /python-prerelease` : plus haute version de l'index FTP (pré-versions incluses)

Le corps est la version en texte brut ; "0" signifie qu'aucun lien ne correspondait. Les erreurs
(`FetchError`, `VersionParseError`) sont traduites en 500 par les handlers de l'application.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from pyversions.core.container import Container

router = APIRouter(tags=["versions"])


def get_container(request: Request) -> Container:
    """Retourne le conteneur attaché à l'application par `create_app`."""
    return request.app.state.container


container_dep = Depends(get_container)


@router.get("/python-stable", response_class=PlainTextResponse)
def python_stable(container: Container = container_dep) -> str:
    """Dernière version stable publiée."""
    return container.scanner.scan_target(container.settings.stable_target)


@router.get("/python-prerelease", response_class=PlainTextResponse)
def python_prerelease(container: Container = container_dep) -> str:
    """Dernière version publiée, pré-versions comprises."""
    return container.scanner.scan_target(container.settings.prerelease_target)
