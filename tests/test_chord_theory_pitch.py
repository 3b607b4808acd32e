"""
Tests for core/chord_theory/pitch.py — note names and pitch classes.

Validates:
    - pitch_class_of / octave_of: MIDI arithmetic
    - note_name / note_name_with_enharmonics: spelled names with octave
    - root_pitch_class: case-insensitive spellings, InvalidNoteName
    - spell / canonical_spelling / enharmonic helpers
    - note_number / parse_note: name + octave → MIDI
"""

from __future__ import annotations

import pytest

from core.chord_theory.errors import ChordTheoryError, InvalidNoteName
from core.chord_theory.pitch import (
    BLACK_KEY_CLASSES,
    FLAT_NAMES,
    NOTE_NAMES,
    canonical_spelling,
    enharmonic_equivalent,
    enharmonic_spellings,
    is_black_key,
    note_name,
    note_name_with_enharmonics,
    note_number,
    octave_of,
    parse_note,
    pitch_class_of,
    root_pitch_class,
    spell,
)

# ---------------------------------------------------------------------------
# MIDI arithmetic
# ---------------------------------------------------------------------------


class TestPitchClass:
    def test_middle_c_is_zero(self):
        assert pitch_class_of(60) == 0

    def test_c_sharp(self):
        assert pitch_class_of(61) == 1

    def test_b_below_middle_c(self):
        assert pitch_class_of(59) == 11

    def test_every_octave_same_class(self):
        assert {pitch_class_of(n) for n in (36, 48, 60, 72, 84)} == {0}

    def test_octave_of_middle_c(self):
        assert octave_of(60) == 4

    def test_octave_of_lowest_note(self):
        assert octave_of(0) == -1


class TestNoteName:
    def test_middle_c(self):
        assert note_name(60) == "C4"

    def test_sharp_by_default(self):
        assert note_name(70) == "A#4"

    def test_flat_spelling(self):
        assert note_name(70, flats=True) == "Bb4"

    def test_lowest_window_note(self):
        assert note_name(36) == "C2"

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError, match="MIDI note"):
            note_name(128)

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            note_name(-1)

    def test_enharmonic_name_for_black_key(self):
        assert note_name_with_enharmonics(61) == "C#/Db4"

    def test_enharmonic_name_for_white_key(self):
        assert note_name_with_enharmonics(64) == "E4"


class TestBlackKeys:
    def test_black_key_classes(self):
        assert BLACK_KEY_CLASSES == frozenset({1, 3, 6, 8, 10})

    def test_c_sharp_is_black(self):
        assert is_black_key(61)

    def test_c_is_white(self):
        assert not is_black_key(60)

    def test_seven_white_keys_per_octave(self):
        assert sum(1 for n in range(60, 72) if not is_black_key(n)) == 7


# ---------------------------------------------------------------------------
# Spellings
# ---------------------------------------------------------------------------


class TestRootPitchClass:
    @pytest.mark.parametrize("name, expected", list(zip(NOTE_NAMES, range(12), strict=True)))
    def test_sharp_spellings(self, name, expected):
        assert root_pitch_class(name) == expected

    @pytest.mark.parametrize("name, expected", list(zip(FLAT_NAMES, range(12), strict=True)))
    def test_flat_spellings(self, name, expected):
        assert root_pitch_class(name) == expected

    def test_case_insensitive(self):
        assert root_pitch_class("f#") == 6
        assert root_pitch_class("BB") == 10

    def test_white_key_enharmonics(self):
        assert root_pitch_class("Cb") == 11
        assert root_pitch_class("Fb") == 4
        assert root_pitch_class("E#") == 5
        assert root_pitch_class("B#") == 0

    def test_surrounding_whitespace_ignored(self):
        assert root_pitch_class(" G ") == 7

    def test_unknown_name_raises(self):
        with pytest.raises(InvalidNoteName, match="'H'"):
            root_pitch_class("H")

    def test_invalid_name_is_value_error(self):
        with pytest.raises(ValueError):
            root_pitch_class("C##")

    def test_invalid_name_is_chord_theory_error(self):
        with pytest.raises(ChordTheoryError):
            root_pitch_class("")

    def test_non_string_raises(self):
        with pytest.raises(InvalidNoteName):
            root_pitch_class(0)  # type: ignore[arg-type]


class TestSpell:
    def test_sharp(self):
        assert spell(1) == "C#"

    def test_flat(self):
        assert spell(1, flats=True) == "Db"

    def test_white_key_same_either_way(self):
        assert spell(4) == spell(4, flats=True) == "E"

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError, match="Pitch class"):
            spell(12)

    def test_canonical_spelling_uses_sharps(self):
        assert canonical_spelling("bb") == "A#"

    def test_canonical_spelling_capitalizes(self):
        assert canonical_spelling("e") == "E"


class TestEnharmonics:
    def test_white_key_has_one_spelling(self):
        assert enharmonic_spellings(0) == ("C",)

    def test_black_key_has_two_spellings(self):
        assert enharmonic_spellings(1) == ("C#", "Db")

    def test_equivalent_of_sharp(self):
        assert enharmonic_equivalent("C#") == "Db"

    def test_equivalent_of_flat(self):
        assert enharmonic_equivalent("Eb") == "D#"

    def test_equivalent_of_white_key_is_none(self):
        assert enharmonic_equivalent("E") is None


# ---------------------------------------------------------------------------
# Name → MIDI
# ---------------------------------------------------------------------------


class TestNoteNumber:
    def test_middle_c(self):
        assert note_number("C", 4) == 60

    def test_default_octave_is_four(self):
        assert note_number("A") == 69

    def test_b_sharp_belongs_to_next_octave(self):
        assert note_number("B#", 3) == 60

    def test_c_flat_belongs_to_previous_octave(self):
        assert note_number("Cb", 4) == 59

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            note_number("A", 9)


class TestParseNote:
    def test_flat_with_octave(self):
        assert parse_note("Bb3") == 58

    def test_sharp_with_octave(self):
        assert parse_note("C#4") == 61

    def test_lower_case(self):
        assert parse_note("bb3") == 58

    def test_negative_octave(self):
        assert parse_note("C-1") == 0

    def test_highest_midi_note(self):
        assert parse_note("G9") == 127

    def test_above_midi_range_raises(self):
        with pytest.raises(InvalidNoteName):
            parse_note("A9")

    def test_missing_octave_raises(self):
        with pytest.raises(InvalidNoteName):
            parse_note("C")

    def test_garbage_raises(self):
        with pytest.raises(InvalidNoteName):
            parse_note("X4")
