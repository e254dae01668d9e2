"""
Modèle de version numérique pointée.

Une `Version` est une suite immuable de composantes entières positives, obtenue à partir
d'une chaîne comme "3.11.4". La comparaison est lexicographique, les composantes manquantes
valant 0 : "3.11" et "3.11.0" sont égales.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from itertools import zip_longest

from pyversions.domain.errors import VersionParseError


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Version comparable et immuable.

    `components` contient les composantes normalisées (sans zéros non significatifs) et sert
    seule aux comparaisons ; `text` conserve la chaîne d'origine pour l'affichage. Les
    composantes restent des chaînes de chiffres : aucune limite de taille d'entier ne s'applique.
    """

    components: tuple[str, ...]
    text: str

    @property
    def parts(self) -> tuple[int, ...]:
        return tuple(int(c) for c in self.components)

    def _compare(self, other: Version) -> int:
        for left, right in zip_longest(self.components, other.components, fillvalue="0"):
            # chiffres normalisés: plus long = plus grand, sinon ordre lexical
            left_key, right_key = (len(left), left), (len(right), right)
            if left_key != right_key:
                return -1 if left_key < right_key else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        components = list(self.components)
        while len(components) > 1 and components[-1] == "0":
            components.pop()
        return hash(tuple(components))

    def __str__(self) -> str:
        return self.text


def parse(text: str) -> Version:
    """
    Interprète une chaîne pointée en `Version`.

    Règles:
    - au moins une composante
    - chaque composante est composée uniquement de chiffres ASCII

    Lève `VersionParseError` sinon.
    """
    if not text:
        raise VersionParseError(text, "empty string")
    components: list[str] = []
    for component in text.split("."):
        if not component:
            raise VersionParseError(text, "empty component")
        if not (component.isascii() and component.isdigit()):
            raise VersionParseError(text, f"non-numeric component {component!r}")
        components.append(component.lstrip("0") or "0")
    return Version(components=tuple(components), text=text)


def less_than(a: Version, b: Version) -> bool:
    """Retourne True si `a` précède strictement `b` (composantes manquantes = 0)."""
    return a < b
