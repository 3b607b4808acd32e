"""
core/chord_theory/inversions.py — Inversion model and voicing.

An inversion is a rotation of the chord-tone order: inversion k puts chord
tone k in the bass and moves the tones below it up by octaves.

Algorithm (apply_inversion):
    1. Reorder quality.intervals by the inversion's interval_order
    2. Add each interval to the root note
    3. Raise any note that does not exceed its predecessor by octaves
       until it does, so the result is strictly ascending

Open voicing (open_voicing):
    The bass stays put; upper tone i of n is raised by octaves until it sits
    at least spread * i // (n - 1) semitones above the bass and above the
    tone before it. Pitch classes are unchanged.

Exports:
    inversion_spec(quality, inversion_id) → InversionSpec
    available_inversions(quality) → tuple[InversionSpec, ...]
    apply_inversion(quality, inversion_id, root_note) → tuple[int, ...]
    bass_pitch_class(root_pc, quality, inversion_id) → int
    open_voicing(notes, spread) → tuple[int, ...]
    fit_to_window(notes, low, high) → tuple[int, ...]
"""

from __future__ import annotations

import functools
from collections.abc import Sequence

from core.chord_theory.errors import UnsupportedInversion
from core.chord_theory.types import INVERSION_IDS, ChordQuality, InversionSpec

# ---------------------------------------------------------------------------
# Inversion specs
# ---------------------------------------------------------------------------


@functools.cache
def inversion_spec(quality: ChordQuality, inversion_id: str) -> InversionSpec:
    """Return the InversionSpec of a quality for an inversion id.

    Args:
        quality:      The chord quality being inverted
        inversion_id: One of INVERSION_IDS ("root", "first", ...)

    Returns:
        InversionSpec whose interval_order is the rotation by the inversion index

    Raises:
        ValueError:           If inversion_id is not a known id
        UnsupportedInversion: If the quality is not drilled in that inversion

    Examples:
        >>> inversion_spec(lookup("minor7"), "first").interval_order
        (1, 2, 3, 0)
    """
    if inversion_id not in INVERSION_IDS:
        raise ValueError(f"Unknown inversion id {inversion_id!r}. Valid: {list(INVERSION_IDS)}")
    index = INVERSION_IDS.index(inversion_id)
    if index > quality.max_inversion:
        raise UnsupportedInversion(quality.id, inversion_id, quality.max_inversion)
    order = tuple(range(quality.note_count))
    return InversionSpec(id=inversion_id, interval_order=order[index:] + order[:index])


def available_inversions(quality: ChordQuality) -> tuple[InversionSpec, ...]:
    """Every inversion the quality supports, root position first."""
    return tuple(
        inversion_spec(quality, inversion_id)
        for inversion_id in INVERSION_IDS[: quality.max_inversion + 1]
    )


# ---------------------------------------------------------------------------
# Voicing
# ---------------------------------------------------------------------------


def apply_inversion(quality: ChordQuality, inversion_id: str, root_note: int) -> tuple[int, ...]:
    """Voice a quality in an inversion above a root note.

    Args:
        quality:      Chord quality to voice
        inversion_id: Inversion id; "root" keeps the interval order
        root_note:    MIDI note of the root before inversion

    Returns:
        Strictly ascending MIDI notes, bass first

    Raises:
        UnsupportedInversion: If the quality is not drilled in that inversion

    Examples:
        >>> apply_inversion(lookup("major"), "root", 60)
        (60, 64, 67)
        >>> apply_inversion(lookup("major"), "first", 60)
        (64, 67, 72)
    """
    spec = inversion_spec(quality, inversion_id)
    notes: list[int] = []
    for tone_index in spec.interval_order:
        note = root_note + quality.intervals[tone_index]
        while notes and note <= notes[-1]:
            note += 12
        notes.append(note)
    return tuple(notes)


def bass_pitch_class(root_pc: int, quality: ChordQuality, inversion_id: str) -> int:
    """Pitch class of the lowest tone of a chord in an inversion."""
    spec = inversion_spec(quality, inversion_id)
    return (root_pc + quality.intervals[spec.interval_order[0]]) % 12


def open_voicing(notes: Sequence[int], spread: int) -> tuple[int, ...]:
    """Spread a close voicing over a wider range, keeping the bass.

    Args:
        notes:  Strictly ascending close voicing, bass first
        spread: Minimum distance in semitones from the bass to the top tone.
                0 returns the voicing unchanged.

    Returns:
        Strictly ascending notes with the same bass and pitch classes

    Raises:
        ValueError: If spread is negative

    Examples:
        >>> open_voicing((48, 52, 55), 12)
        (48, 64, 67)
        >>> open_voicing((48, 52, 55, 58), 24)
        (48, 64, 67, 82)
    """
    if spread < 0:
        raise ValueError(f"spread must be >= 0, got {spread}")
    if len(notes) < 2:
        return tuple(notes)
    bass = notes[0]
    upper_count = len(notes) - 1
    voiced = [bass]
    for index, note in enumerate(notes[1:], start=1):
        floor = bass + spread * index // upper_count
        while note < floor or note <= voiced[-1]:
            note += 12
        voiced.append(note)
    return tuple(voiced)


def fit_to_window(notes: Sequence[int], low: int, high: int) -> tuple[int, ...]:
    """Transpose a whole chord by octaves so every note lies in [low, high].

    Pitch classes and the bass tone are preserved; no note is dropped.

    Raises:
        ValueError: If the chord is empty, wider than the window, or no
            octave shift places it inside
    """
    if not notes:
        raise ValueError("Cannot fit an empty chord into the pitch window")
    lowest, highest = min(notes), max(notes)
    if highest - lowest > high - low:
        raise ValueError(
            f"Chord spans {highest - lowest} semitones, wider than window [{low}, {high}]"
        )
    shift = 0
    while lowest + shift < low:
        shift += 12
    while highest + shift > high:
        shift -= 12
    if lowest + shift < low:
        raise ValueError(f"No octave shift places {tuple(notes)} inside [{low}, {high}]")
    return tuple(note + shift for note in notes)
