"""Tests pour le modèle de version numérique pointée.

Ce module vérifie le parsing strict et l'ordre total avec complétion par zéros.
"""

from __future__ import annotations

import itertools

import pytest

from pyversions.domain.errors import VersionParseError
from pyversions.domain.version import Version, less_than, parse

# Constantes pour éviter les erreurs PLR2004 (Magic values)
VERSION_3_11_4 = (3, 11, 4)
LEADING_ZERO_PARTS = (3, 1)


def test_parse_components() -> None:
    """Teste le découpage en entiers et la conservation du texte d'origine."""
    v = parse("3.11.4")
    assert v.parts == VERSION_3_11_4
    assert str(v) == "3.11.4"


def test_parse_single_component_and_leading_zero() -> None:
    """Teste une composante unique et les zéros non significatifs."""
    assert parse("0").parts == (0,)
    assert parse("03.01").parts == LEADING_ZERO_PARTS


@pytest.mark.parametrize("text", ["", ".", "3.", ".3", "3..1", "3.11rc1", "a.b", "3,11", "-1", " 3"])
def test_parse_rejects_malformed(text: str) -> None:
    """Teste que toute séquence non numérique pointée lève VersionParseError."""
    with pytest.raises(VersionParseError):
        parse(text)


def test_parse_rejects_non_ascii_digits() -> None:
    """Teste que les chiffres Unicode non ASCII sont refusés."""
    with pytest.raises(VersionParseError):
        parse("٣.١")


def test_trailing_zero_equality() -> None:
    """Teste que 3.11 et 3.11.0 sont égales et de même hash."""
    assert parse("3.11") == parse("3.11.0")
    assert parse("3.11.0.0") == parse("3.11")
    assert hash(parse("3.11")) == hash(parse("3.11.0"))
    assert not less_than(parse("3.11"), parse("3.11.0"))
    assert not less_than(parse("3.11.0"), parse("3.11"))


def test_numeric_not_lexical_ordering() -> None:
    """Teste que la comparaison est numérique composante par composante."""
    assert parse("3.9.12") < parse("3.10.0")
    assert parse("3.9") < parse("3.9.1")
    assert parse("10") > parse("9.99.99")
    assert less_than(parse("0"), parse("0.0.1"))


def test_total_ordering_consistent_with_padded_tuples() -> None:
    """Teste la cohérence de l'ordre avec la comparaison de tuples complétés par des zéros."""
    texts = ["0", "1", "1.0", "1.0.1", "1.2", "2.0.0", "3.9.12", "3.10", "3.10.0", "10.0"]

    def padded(v: Version) -> tuple[int, ...]:
        return v.parts + (0,) * (4 - len(v.parts))

    for a, b in itertools.product(texts, repeat=2):
        va, vb = parse(a), parse(b)
        assert less_than(va, vb) == (padded(va) < padded(vb))
        assert (va == vb) == (padded(va) == padded(vb))


def test_huge_components_are_valid() -> None:
    """Teste des composantes au-delà de la limite de conversion str -> int de CPython."""
    huge = "9" * 5000
    v = parse(f"1.{huge}")
    assert str(v) == f"1.{huge}"
    assert parse(f"1.{huge}") > parse(f"1.{'9' * 4999}")
    assert parse(f"1.{huge}") < parse(f"1.1{'0' * 5000}")
    assert parse(f"1.{'0' * 10}{huge}") == v
    assert hash(parse(f"1.{huge}.0")) == hash(v)


def test_leading_zeros_do_not_affect_ordering() -> None:
    """Teste que 3.010 est égale à 3.10 et supérieure à 3.9."""
    assert parse("3.010") == parse("3.10")
    assert parse("3.010") > parse("3.9")
    assert parse("3.00") == parse("3")


def test_version_is_immutable() -> None:
    """Teste que la version ne peut pas être modifiée après parsing."""
    v = parse("1.2")
    with pytest.raises(AttributeError):
        v.components = ("9",)  # type: ignore[misc]


def test_compare_with_other_type() -> None:
    """Teste que la comparaison avec un autre type ne lève pas pour l'égalité."""
    assert parse("1.2") != "1.2"
    with pytest.raises(TypeError):
        _ = parse("1.2") < "1.3"  # type: ignore[operator]
