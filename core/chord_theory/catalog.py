"""
core/chord_theory/catalog.py — The unified chord quality catalog.

One table keyed by quality id covers triads, suspended/quartal chords,
sevenths, 9ths, 11ths and 13ths. Each entry carries its family and the
highest inversion it is drilled in, so callers never need ad hoc
"is this an extended chord" name checks.

Inversion ceilings follow the drill curriculum:
    triads / suspended   up to 2nd inversion (augmented: root only —
                         its inversions are spelled like other augmented triads)
    sevenths             up to 3rd inversion
    9ths                 up to 4th inversion
    11ths                up to 2nd inversion
    13ths                1st inversion only

Exports:
    CATALOG                 quality id → ChordQuality
    QUALITY_ALIASES         legacy / alternative id → catalog id

    lookup(quality_id) → ChordQuality
    all_quality_ids() → tuple[str, ...]
    qualities_in_family(family) → tuple[ChordQuality, ...]
    quality_for_symbol(text) → ChordQuality | None
    normalize_symbol(text) → str
    accepted_symbols(quality) → tuple[str, ...]
"""

from __future__ import annotations

import functools

from core.chord_theory.errors import UnknownQuality
from core.chord_theory.types import ChordQuality


def _q(
    id: str,
    display_name: str,
    symbol: str,
    intervals: tuple[int, ...],
    abbreviations: tuple[str, ...],
    family: str,
    max_inversion: int,
) -> ChordQuality:
    return ChordQuality(
        id=id,
        display_name=display_name,
        symbol=symbol,
        intervals=intervals,
        abbreviations=abbreviations,
        family=family,
        max_inversion=max_inversion,
    )


_QUALITIES: tuple[ChordQuality, ...] = (
    # Triads
    _q("major", "Major", "", (0, 4, 7), ("", "maj", "major", "M"), "triad", 2),
    _q("minor", "Minor", "m", (0, 3, 7), ("m", "min", "minor", "-"), "triad", 2),
    _q(
        "diminished",
        "Diminished",
        "dim",
        (0, 3, 6),
        ("dim", "diminished", "°", "º", "o"),
        "triad",
        2,
    ),
    _q("augmented", "Augmented", "aug", (0, 4, 8), ("aug", "augmented", "+", "#5"), "triad", 0),
    # Suspended / quartal
    _q("sus2", "Suspended 2nd", "sus2", (0, 2, 7), ("sus2", "sus(add2)"), "suspended", 2),
    _q("sus4", "Suspended 4th", "sus4", (0, 5, 7), ("sus4", "sus"), "suspended", 2),
    _q("quartal", "Quartal", "quartal", (0, 5, 10), ("quartal", "4ths"), "suspended", 2),
    # Sevenths
    _q(
        "major7",
        "Major 7th",
        "maj7",
        (0, 4, 7, 11),
        ("maj7", "M7", "Δ7", "major7"),
        "seventh",
        3,
    ),
    _q(
        "minor7",
        "Minor 7th",
        "m7",
        (0, 3, 7, 10),
        ("m7", "min7", "-7", "minor7"),
        "seventh",
        3,
    ),
    _q("dominant7", "Dominant 7th", "7", (0, 4, 7, 10), ("7", "dom7", "dominant7"), "seventh", 3),
    _q(
        "diminished7",
        "Diminished 7th",
        "dim7",
        (0, 3, 6, 9),
        ("dim7", "°7", "o7", "diminished7"),
        "seventh",
        3,
    ),
    _q(
        "half_diminished7",
        "Half Diminished 7th",
        "m7b5",
        (0, 3, 6, 10),
        ("m7b5", "ø7", "ø", "min7b5", "-7b5", "halfdiminished7", "half-dim7"),
        "seventh",
        3,
    ),
    # 9ths
    _q("maj9", "Major 9th", "maj9", (0, 4, 7, 11, 14), ("maj9", "M9", "Δ9"), "ninth", 4),
    _q("min9", "Minor 9th", "m9", (0, 3, 7, 10, 14), ("m9", "min9", "-9"), "ninth", 4),
    _q("dom9", "Dominant 9th", "9", (0, 4, 7, 10, 14), ("9", "dom9"), "ninth", 4),
    # 11ths
    _q(
        "maj11",
        "Major 11th",
        "maj11",
        (0, 4, 7, 11, 14, 17),
        ("maj11", "M11", "Δ11"),
        "eleventh",
        2,
    ),
    _q(
        "min11",
        "Minor 11th",
        "m11",
        (0, 3, 7, 10, 14, 17),
        ("m11", "min11", "-11"),
        "eleventh",
        2,
    ),
    _q("dom11", "Dominant 11th", "11", (0, 4, 7, 10, 14, 17), ("11", "dom11"), "eleventh", 2),
    # 13ths
    _q(
        "maj13",
        "Major 13th",
        "maj13",
        (0, 4, 7, 11, 14, 21),
        ("maj13", "M13", "Δ13"),
        "thirteenth",
        1,
    ),
    _q(
        "min13",
        "Minor 13th",
        "m13",
        (0, 3, 7, 10, 14, 21),
        ("m13", "min13", "-13"),
        "thirteenth",
        1,
    ),
    _q("dom13", "Dominant 13th", "13", (0, 4, 7, 10, 14, 21), ("13", "dom13"), "thirteenth", 1),
)

CATALOG: dict[str, ChordQuality] = {q.id: q for q in _QUALITIES}

# Ids used by older level definitions (camelCase, duplicate entries)
QUALITY_ALIASES: dict[str, str] = {
    "halfDiminished7": "half_diminished7",
    "minor7b5": "half_diminished7",
    "halfdim7": "half_diminished7",
    "maj7": "major7",
    "min7": "minor7",
    "dom7": "dominant7",
    "dim7": "diminished7",
    "dim": "diminished",
    "aug": "augmented",
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def lookup(quality_id: str) -> ChordQuality:
    """Return the ChordQuality for an id (or a known alias).

    Raises:
        UnknownQuality: If the id is not in the catalog
    """
    quality = CATALOG.get(QUALITY_ALIASES.get(quality_id, quality_id))
    if quality is None:
        raise UnknownQuality(quality_id, sorted(CATALOG))
    return quality


def all_quality_ids() -> tuple[str, ...]:
    """Catalog ids in catalog order (triads first, 13ths last)."""
    return tuple(CATALOG)


def qualities_in_family(family: str) -> tuple[ChordQuality, ...]:
    """Return every quality of a family, e.g. "seventh"."""
    return tuple(q for q in _QUALITIES if q.family == family)


# ---------------------------------------------------------------------------
# Symbol normalization
# ---------------------------------------------------------------------------


def normalize_symbol(text: str) -> str:
    """Lower-case and strip all whitespace — the comparison form of answers."""
    return "".join(text.lower().split())


@functools.cache
def symbol_table() -> dict[str, tuple[str, ...]]:
    """Map each normalized abbreviation to the quality ids that use it.

    Built once; an abbreviation mapped to more than one id is ambiguous
    after lower-casing ("M" vs "m", "M7" vs "m7").
    """
    table: dict[str, list[str]] = {}
    for quality in _QUALITIES:
        for abbreviation in dict.fromkeys((quality.symbol, *quality.abbreviations)):
            ids = table.setdefault(normalize_symbol(abbreviation), [])
            if quality.id not in ids:
                ids.append(quality.id)
    return {key: tuple(ids) for key, ids in table.items()}


def accepted_symbols(quality: ChordQuality) -> tuple[str, ...]:
    """Normalized abbreviations that identify this quality unambiguously.

    The canonical symbol is always first and always kept.
    """
    table = symbol_table()
    canonical = normalize_symbol(quality.symbol)
    result = [canonical]
    for abbreviation in quality.abbreviations:
        key = normalize_symbol(abbreviation)
        if key not in result and table.get(key) == (quality.id,):
            result.append(key)
    return tuple(result)


def quality_for_symbol(text: str) -> ChordQuality | None:
    """Reverse lookup: the quality a typed suffix names, if any.

    A canonical symbol always names its own quality; other abbreviations
    must be unambiguous after lower-casing.

    Examples:
        >>> quality_for_symbol("min7").id
        'minor7'
        >>> quality_for_symbol("M").id   # lower-cased, reads as "m"
        'minor'
        >>> quality_for_symbol("xyz") is None
        True
    """
    key = normalize_symbol(text)
    for quality in _QUALITIES:
        if normalize_symbol(quality.symbol) == key:
            return quality
    ids = symbol_table().get(key, ())
    if len(ids) != 1:
        return None
    return CATALOG[ids[0]]
