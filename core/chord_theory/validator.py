"""
core/chord_theory/validator.py — Answer validation for chord exercises.

Two answer shapes are checked against a generated ChordInstance:

    validate_notes  — notes placed on the piano roll. Correct when the
                      pitch-class multiset matches and the lowest submitted
                      note is the inversion's bass. Octave placement is free.
    validate_text   — a typed chord name. Correct when its normalized form
                      (lower-case, no whitespace) is one of
                      acceptable_answers(instance).

Accepted text forms, for every enharmonic root spelling and every
unambiguous quality abbreviation (base = root + abbreviation):
    root position   base, "base root", "base root position"
    inversion k     "base/k", "base/first", "base first inversion",
                    "base 1st inversion", "base/<bass>" for either bass
                    spelling; bare base only when inversion labels are
                    not required
    augmented root  also the roots a major third and a minor sixth above

Wrong answers return False; nothing here raises for a wrong answer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from core.chord_theory.catalog import accepted_symbols, normalize_symbol
from core.chord_theory.pitch import enharmonic_spellings
from core.chord_theory.types import ChordInstance

_ORDINAL_WORDS: dict[int, str] = {1: "first", 2: "second", 3: "third", 4: "fourth"}
_ORDINAL_NUMBERS: dict[int, str] = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}

# Augmented triads divide the octave evenly: the same notes name three roots
_AUGMENTED_ROOT_OFFSETS: tuple[int, ...] = (0, 4, 8)


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


def validate_notes(instance: ChordInstance, submitted_notes: Sequence[int]) -> bool:
    """Check a set of submitted MIDI notes against the exercise chord.

    Args:
        instance:        The generated exercise
        submitted_notes: MIDI notes in any order

    Returns:
        True if the note count, the pitch-class multiset and the bass
        pitch class all match

    Examples:
        >>> c_major = build_instance("C", "major")
        >>> validate_notes(c_major, [60, 64, 67])
        True
        >>> validate_notes(c_major, [64, 67, 72])   # E in the bass
        False
    """
    notes = list(submitted_notes)
    if len(notes) != len(instance.notes):
        return False
    if any(isinstance(note, bool) or not isinstance(note, int) for note in notes):
        return False
    submitted_classes = sorted(note % 12 for note in notes)
    expected_classes = sorted(note % 12 for note in instance.notes)
    if submitted_classes != expected_classes:
        return False
    return min(notes) % 12 == instance.bass_pitch_class


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _root_spellings(instance: ChordInstance) -> list[str]:
    offsets = (0,)
    if instance.quality.id == "augmented" and instance.inversion.is_root_position:
        offsets = _AUGMENTED_ROOT_OFFSETS
    spellings: list[str] = []
    for offset in offsets:
        for name in enharmonic_spellings((instance.root + offset) % 12):
            spellings.append(name.lower())
    return spellings


def acceptable_answers(
    instance: ChordInstance, *, require_inversion_label: bool = True
) -> frozenset[str]:
    """Every normalized text answer that names this chord correctly.

    Args:
        instance:                The generated exercise
        require_inversion_label: When False, a bare chord name such as "C"
                                 is also accepted for an inverted chord

    Returns:
        Frozen set of normalized answers (lower-case, whitespace removed)
    """
    symbols = accepted_symbols(instance.quality)
    bases = [root + symbol for root in _root_spellings(instance) for symbol in symbols]

    index = instance.inversion.index
    answers: set[str] = set()
    if index == 0:
        for base in bases:
            answers.update((base, base + "root", base + "rootposition"))
        return frozenset(answers)

    word = _ORDINAL_WORDS[index]
    number = _ORDINAL_NUMBERS[index]
    basses = [name.lower() for name in enharmonic_spellings(instance.bass_pitch_class)]
    for base in bases:
        answers.update(
            (
                f"{base}/{index}",
                f"{base}/{word}",
                f"{base}{word}inversion",
                f"{base}{number}inversion",
            )
        )
        answers.update(f"{base}/{bass}" for bass in basses)
        if not require_inversion_label:
            answers.add(base)
    return frozenset(answers)


def validate_text(
    instance: ChordInstance, submitted_text: str, *, require_inversion_label: bool = True
) -> bool:
    """Check a typed chord name against the exercise chord.

    Examples:
        >>> d_minor7 = build_instance("D", "minor7", "first")
        >>> validate_text(d_minor7, "Dm7/1"), validate_text(d_minor7, "Dm7/F")
        (True, True)
        >>> validate_text(build_instance("C", "augmented"), "G# aug")
        True
    """
    if not isinstance(submitted_text, str):
        return False
    normalized = normalize_symbol(submitted_text)
    if not normalized:
        return False
    return normalized in acceptable_answers(
        instance, require_inversion_label=require_inversion_label
    )


def validate_answer(
    instance: ChordInstance,
    answer: str | Iterable[int],
    *,
    require_inversion_label: bool = True,
) -> bool:
    """Validate either answer shape: a string is a chord name, anything
    iterable is a set of MIDI notes.

    Raises:
        TypeError: If the answer is neither a string nor iterable
    """
    if isinstance(answer, str):
        return validate_text(instance, answer, require_inversion_label=require_inversion_label)
    if not isinstance(answer, Iterable):
        raise TypeError(f"Answer must be a chord name or MIDI notes, got {type(answer).__name__}")
    return validate_notes(instance, list(answer))
