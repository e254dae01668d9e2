"""Sélection des cibles de liens dans un document HTML.

Objectif du module
------------------
- Isoler le parsing HTML (BeautifulSoup + sélecteurs CSS) de la logique de versions.
"""

from __future__ import annotations

from collections.abc import Iterator

from bs4 import BeautifulSoup


def select_hrefs(document: str, selector: str) -> Iterator[str]:
    """Génère l'attribut `href` de chaque élément correspondant à `selector`, dans l'ordre du document."""
    soup = BeautifulSoup(document, "html.parser")
    for element in soup.select(selector):
        href = element.get("href")
        if href is None:
            continue
        # attributs multi-valués: bs4 peut renvoyer une liste
        if isinstance(href, list):
            href = " ".join(href)
        yield href
