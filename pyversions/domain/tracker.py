"""
Réduction d'une suite de liens vers la version maximale rencontrée.

Le pli démarre sur la version sentinelle "0" : n'importe quelle vraie correspondance la remplace,
et une page sans correspondance produit "0".
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

import structlog

from pyversions.domain.errors import VersionParseError
from pyversions.domain.extractor import extract
from pyversions.domain.version import Version, parse

log = structlog.get_logger(__name__)

ZERO_VERSION = parse("0")


def fold(current: Version, candidate_text: str) -> Version:
    """Combine la version courante avec la version éventuellement portée par `candidate_text`."""
    candidate = extract(candidate_text)
    if candidate is None:
        return current

    log.debug("version_candidate", candidate=candidate, href=candidate_text)
    try:
        version = parse(candidate)
    except VersionParseError:
        # Le motif d'extraction garantit du texte numérique pointé.
        log.error("version_candidate_unparseable", candidate=candidate, href=candidate_text)
        raise

    if current < version:
        return version
    return current


def track_max(hrefs: Iterable[str], start: Version = ZERO_VERSION) -> Version:
    """Pli gauche de `fold` sur `hrefs`, dans l'ordre du document."""
    return reduce(fold, hrefs, start)
