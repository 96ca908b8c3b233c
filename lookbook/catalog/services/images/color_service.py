"""
Colour label helpers: token normalisation and the alias equivalence table.

Spreadsheet rows and image filenames spell the same colour in many ways
(``OFF``, ``OFF WHITE``, ``CREAM``, Hebrew labels, ``BLACK-LOGO``...). Both
sides are reduced to a comparable token first; when the tokens differ the
explicit alias table below decides whether they still name the same colour.
"""
from __future__ import annotations

import re
from typing import Dict, FrozenSet, Mapping, Optional

NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")

STRIPPED_SUFFIXES = ("OS", "LOGO")

# Bump when entries change: image assignments depend on the exact set.
COLOR_TABLE_VERSION = 1

# Canonical token -> raw aliases (normalised before comparison).
# Not transitive: OFF ~ CREAM and OFF ~ OFFWHITE do not make CREAM ~ OFFWHITE.
COLOR_EQUIVALENCE_TABLE: Mapping[str, FrozenSet[str]] = {
    "OFF": frozenset({"OFFWHITE", "OFF WHITE", "CREAM", "אוף וויט"}),
    "OFFWHITE": frozenset({"OFF", "OFFWHITE"}),
    "COG": frozenset({"COGNAC", "COGNAC BROWN", "קוניאק"}),
    "COGNAC": frozenset({"COG"}),
    "BLA": frozenset({"BLACK", "NOIR", "שחור", "BLK", "BLACKLOGO"}),
    "BLK": frozenset({"BLACK", "NOIR", "שחור", "BLA"}),
    "BLACK": frozenset({"BLA", "BLK", "NOIR", "שחור"}),
}


def _strip_suffixes(token: str) -> str:
    for suffix in STRIPPED_SUFFIXES:
        if token.endswith(suffix):
            token = token[: -len(suffix)]
    return token


def normalize_color_token(raw: Optional[str]) -> str:
    """
    Reduce a free-text colour label to its comparable token.

    Upper-cases, keeps only ``A-Z0-9`` and then strips a trailing ``OS``
    followed by a trailing ``LOGO``. Suffix stripping runs after the
    character filter, so ``"BLACK-LOGO"`` and ``"black logo"`` both become
    ``"BLACK"``. Returns ``""`` for empty input.
    """
    if raw is None:
        return ""
    token = NON_ALNUM_RE.sub("", str(raw).strip().upper())
    while True:
        stripped = _strip_suffixes(token)
        if stripped == token:
            return token
        token = stripped


def _build_normalised_aliases(table: Mapping[str, FrozenSet[str]]) -> Dict[str, FrozenSet[str]]:
    # Hebrew aliases normalise to "" and must not make blank colours match.
    normalised: Dict[str, FrozenSet[str]] = {}
    for key, aliases in table.items():
        tokens = {normalize_color_token(alias) for alias in aliases}
        tokens.discard("")
        normalised[key] = frozenset(tokens)
    return normalised


_NORMALISED_ALIASES = _build_normalised_aliases(COLOR_EQUIVALENCE_TABLE)


def color_aliases(token: str) -> FrozenSet[str]:
    """Normalised alias tokens listed for ``token`` (empty when absent)."""
    return _NORMALISED_ALIASES.get(token, frozenset())


def colors_equivalent(token_a: str, token_b: str) -> bool:
    """
    Check whether two colour tokens name the same colour.

    Equal tokens match. Otherwise ``token_a``'s alias set is searched for
    ``token_b`` and then ``token_b``'s alias set for ``token_a``. Only the
    entries written in the table count.
    """
    if token_a == token_b:
        return True
    if token_b and token_b in color_aliases(token_a):
        return True
    if token_a and token_a in color_aliases(token_b):
        return True
    return False


def colors_match(image_color: Optional[str], product_color: Optional[str]) -> bool:
    """Raw-label convenience wrapper: normalise both sides, then compare."""
    return colors_equivalent(
        normalize_color_token(image_color),
        normalize_color_token(product_color),
    )
