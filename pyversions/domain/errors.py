"""Erreurs typées du domaine de détection de versions.

Ces exceptions remontent jusqu'à la façade HTTP, qui les traduit en codes de statut via les
handlers enregistrés dans `create_app`. Aucune ne doit terminer le processus.
"""

from __future__ import annotations


class VersionError(Exception):
    """Erreur de base du domaine."""


class VersionParseError(VersionError):
    """Texte impossible à interpréter comme une version numérique pointée."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid version {text!r}: {reason}")
        self.text = text
        self.reason = reason


class FetchError(VersionError):
    """Échec de récupération d'une page distante (réseau, DNS, TLS, statut HTTP)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code
