"""
core/chord_theory/pitch.py — Pitch and note-name primitives.

Exports:
    NOTE_NAMES              12-element tuple of chromatic note names (sharps)
    FLAT_NAMES              12-element tuple of chromatic note names (flats)
    BLACK_KEY_CLASSES       pitch classes of the black piano keys

    pitch_class_of(note) → int
    note_name(note, flats) → str                e.g. 60 → "C4"
    note_name_with_enharmonics(note) → str      e.g. 61 → "C#/Db4"
    is_black_key(note) → bool
    root_pitch_class(name) → int                e.g. "f#" → 6
    spell(pc, flats) → str
    enharmonic_spellings(pc) → tuple[str, ...]
    enharmonic_equivalent(name) → str | None
    note_number(name, octave) → int             e.g. ("C", 4) → 60
    parse_note(text) → int                      e.g. "Bb3" → 58

Note numbering is MIDI-style: note = pitch_class + 12 * (octave + 1).
"""

from __future__ import annotations

import re

from core.chord_theory.errors import InvalidNoteName

# ---------------------------------------------------------------------------
# Chromatic pitch classes
# ---------------------------------------------------------------------------

NOTE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

FLAT_NAMES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

BLACK_KEY_CLASSES: frozenset[int] = frozenset({1, 3, 6, 8, 10})

# Every accepted spelling (lower-cased) → pitch class.
# Sharps and naturals are the standard set; flats and the white-key
# enharmonics (Cb, Fb, E#, B#) are accepted for input convenience.
_SPELLING_TO_PC: dict[str, int] = {
    **{name.lower(): pc for pc, name in enumerate(NOTE_NAMES)},
    **{name.lower(): pc for pc, name in enumerate(FLAT_NAMES)},
    "cb": 11,
    "fb": 4,
    "e#": 5,
    "b#": 0,
}

_NOTE_WITH_OCTAVE = re.compile(r"^\s*([A-Ga-g][#b]?)\s*(-?\d+)\s*$")


# ---------------------------------------------------------------------------
# Note numbers
# ---------------------------------------------------------------------------


def _check_midi(note: int) -> None:
    if not (0 <= note <= 127):
        raise ValueError(f"MIDI note must be in [0, 127], got {note}")


def pitch_class_of(note: int) -> int:
    """Return the pitch class (0–11) of a MIDI note."""
    return note % 12


def octave_of(note: int) -> int:
    """Return the scientific-pitch octave of a MIDI note (60 → 4)."""
    return note // 12 - 1


def note_name(note: int, *, flats: bool = False) -> str:
    """Return the spelled name of a MIDI note with its octave.

    Args:
        note:  MIDI note number 0–127
        flats: Spell black keys with flats ("Db4") instead of sharps ("C#4")

    Returns:
        Name string, e.g. "C4", "A#3"

    Raises:
        ValueError: If note is outside [0, 127]

    Examples:
        >>> note_name(60)
        'C4'
        >>> note_name(70, flats=True)
        'Bb4'
    """
    _check_midi(note)
    return f"{spell(note % 12, flats=flats)}{octave_of(note)}"


def note_name_with_enharmonics(note: int) -> str:
    """Return a name listing both spellings of black keys, e.g. 'C#/Db4'."""
    _check_midi(note)
    pc = note % 12
    if pc in BLACK_KEY_CLASSES:
        return f"{NOTE_NAMES[pc]}/{FLAT_NAMES[pc]}{octave_of(note)}"
    return note_name(note)


def is_black_key(note: int) -> bool:
    """True if the note falls on a black piano key."""
    return note % 12 in BLACK_KEY_CLASSES


# ---------------------------------------------------------------------------
# Spellings
# ---------------------------------------------------------------------------


def root_pitch_class(name: str) -> int:
    """Return the pitch class of a note name, ignoring case.

    Args:
        name: Note name without octave, e.g. "C", "f#", "Bb"

    Returns:
        Pitch class integer 0 (C) through 11 (B)

    Raises:
        InvalidNoteName: If the name is not a recognized spelling
    """
    if not isinstance(name, str):
        raise InvalidNoteName(repr(name))
    pc = _SPELLING_TO_PC.get(name.strip().lower())
    if pc is None:
        raise InvalidNoteName(name)
    return pc


def spell(pc: int, *, flats: bool = False) -> str:
    """Return the name of a pitch class in sharp (default) or flat spelling.

    Raises:
        ValueError: If pc is out of range
    """
    if not (0 <= pc <= 11):
        raise ValueError(f"Pitch class must be in [0, 11], got {pc}")
    return FLAT_NAMES[pc] if flats else NOTE_NAMES[pc]


def canonical_spelling(name: str) -> str:
    """Normalize a note name to the sharp spelling used in canonical names.

    Examples:
        >>> canonical_spelling("bb")
        'A#'
    """
    return NOTE_NAMES[root_pitch_class(name)]


def enharmonic_spellings(pc: int) -> tuple[str, ...]:
    """Return the sharp and flat spellings of a pitch class (one for white keys)."""
    sharp = spell(pc)
    flat = spell(pc, flats=True)
    return (sharp,) if sharp == flat else (sharp, flat)


def enharmonic_equivalent(name: str) -> str | None:
    """Return the other common spelling of a black key, or None for white keys.

    Examples:
        >>> enharmonic_equivalent("C#")
        'Db'
        >>> enharmonic_equivalent("Eb")
        'D#'
        >>> enharmonic_equivalent("E") is None
        True
    """
    pc = root_pitch_class(name)
    if pc not in BLACK_KEY_CLASSES:
        return None
    sharp, flat = NOTE_NAMES[pc], FLAT_NAMES[pc]
    return flat if name.strip().lower() == sharp.lower() else sharp


def note_number(name: str, octave: int = 4) -> int:
    """Return the MIDI number of a note name in a given octave.

    Raises:
        InvalidNoteName: If name is unrecognized
        ValueError: If the result falls outside [0, 127]
    """
    number = (octave + 1) * 12 + root_pitch_class(name)
    # B#/Cb belong to the neighbouring octave
    lowered = name.strip().lower()
    if lowered == "b#":
        number += 12
    elif lowered == "cb":
        number -= 12
    _check_midi(number)
    return number


def parse_note(text: str) -> int:
    """Parse a note with octave, e.g. "C#4" or "bb3", into a MIDI number.

    Raises:
        InvalidNoteName: If the text is not <name><octave>
    """
    match = _NOTE_WITH_OCTAVE.match(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidNoteName(str(text))
    name, octave = match.groups()
    try:
        return note_number(name, int(octave))
    except InvalidNoteName:
        raise
    except ValueError as exc:
        raise InvalidNoteName(text) from exc
