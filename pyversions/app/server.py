"""
Point d'entrée du serveur HTTP.

Charge la configuration, construit l'application et lance uvicorn sur `PORT`. Une configuration
absente ou invalide est fatale : le processus s'arrête avec le code 1.
"""

import sys

import structlog
import uvicorn
from pydantic import ValidationError

from pyversions.app.main import create_app
from pyversions.core.container import Container
from pyversions.core.logging import setup_logging
from pyversions.core.settings import get_settings

log = structlog.get_logger(__name__)


def main() -> int:
    """Lance le service ; retourne le code de sortie."""
    try:
        settings = get_settings()
    except ValidationError as err:
        setup_logging()
        log.error("configuration_invalid", errors=err.errors(include_url=False))
        return 1

    app = create_app(Container(settings=settings))
    log.info("server_starting", host=settings.APP_HOST, port=settings.PORT)
    uvicorn.run(app, host=settings.APP_HOST, port=settings.PORT, reload=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
