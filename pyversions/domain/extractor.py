"""Extraction d'une version candidate depuis la cible d'un lien."""

from __future__ import annotations

import re

# Au moins un point: les entiers isolés ne sont jamais retenus. Chiffres ASCII uniquement,
# comme `parse`.
VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)+", re.ASCII)


def extract(text: str) -> str | None:
    """
    Retourne la première sous-chaîne numérique pointée de `text`, ou None.

    La première occurrence l'emporte, pas la plus longue ni la dernière. Absence de résultat est
    le cas normal pour la plupart des liens d'une page.
    """
    match = VERSION_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0)
