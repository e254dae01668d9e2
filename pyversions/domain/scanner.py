"""
Scan d'une page de listing pour y trouver la version la plus récente.

Responsabilités du module:
- Décrire les cibles de scan (URL + sélecteur CSS)
- Récupérer la page, sélectionner les liens et plier leurs cibles via le tracker
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol

import structlog

from pyversions.app.metrics import VERSION_SCAN_DURATION, VERSION_SCANS
from pyversions.domain.errors import FetchError, VersionParseError
from pyversions.domain.tracker import track_max
from pyversions.infra.html_links import select_hrefs

log = structlog.get_logger(__name__)

STABLE_URL = "https://www.python.org/downloads/source/"
STABLE_SELECTOR = ".col-row.two-col .column:first-child a[href]"
PRERELEASE_URL = "https://www.python.org/ftp/python/"
PRERELEASE_SELECTOR = "a[href]"


class Fetcher(Protocol):
    """Source du HTML d'une page (lève `FetchError` en cas d'échec)."""

    def fetch(self, url: str) -> str: ...


@dataclass(frozen=True)
class ScanTarget:
    """Page à scanner et sélecteur des liens porteurs de version."""

    name: str
    url: str
    selector: str


class PageScanner:
    """Récupère une page et retourne la plus haute version trouvée dans ses liens."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    def scan(self, url: str, selector: str) -> str:
        """
        Retourne la version maximale (texte) trouvée sur `url`.

        "0" signifie qu'aucun lien ne correspondait : ce n'est pas une erreur. Les échecs
        réseau remontent en `FetchError`.
        """
        document = self.fetcher.fetch(url)
        return str(track_max(select_hrefs(document, selector)))

    def scan_target(self, target: ScanTarget) -> str:
        """Scanne une cible nommée en journalisant et mesurant l'opération."""
        start = time.perf_counter()
        try:
            version = self.scan(target.url, target.selector)
        except FetchError:
            VERSION_SCANS.labels(target=target.name, result="fetch_error").inc()
            raise
        except VersionParseError:
            VERSION_SCANS.labels(target=target.name, result="parse_error").inc()
            raise
        finally:
            VERSION_SCAN_DURATION.labels(target=target.name).observe(time.perf_counter() - start)

        result = "not_found" if version == "0" else "found"
        VERSION_SCANS.labels(target=target.name, result=result).inc()
        log.info("version_scanned", target=target.name, url=target.url, version=version)
        return version
