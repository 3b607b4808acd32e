"""
Tests for core/chord_theory/levels.py — YAML level definitions.

Validates:
    - available_categories / available_levels
    - load_level: numbers, level ids, category spellings, LevelNotFound
    - curriculum values for each category (qualities, inversions, thresholds)
    - level_from_dict: defaults, overrides, validation
    - caching and generation for every built-in level
"""

from __future__ import annotations

import random

import pytest

from core.chord_theory.errors import LevelNotFound
from core.chord_theory.generator import generate
from core.chord_theory.levels import (
    _load_category,
    available_categories,
    available_levels,
    get_level,
    level_from_dict,
    load_level,
)

_NATURAL_ROOTS = ("C", "D", "E", "F", "G", "A", "B")
_TRIADS = ("major", "minor", "diminished", "augmented")

# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestAvailable:
    def test_categories(self):
        assert available_categories() == ["basic_triads", "extended_chords", "seventh_chords"]

    def test_basic_triad_levels(self):
        assert available_levels("basic_triads") == [
            "basic-triads-level1",
            "basic-triads-level2",
            "basic-triads-level3",
            "basic-triads-level4",
            "basic-triads-level5",
        ]

    def test_all_levels(self):
        levels = available_levels()
        assert "extended-chords-level3" in levels
        assert "seventh-chords-level1" in levels
        assert len(levels) == len(set(levels))

    def test_unknown_category(self):
        with pytest.raises(LevelNotFound, match="Unknown level category"):
            available_levels("counterpoint")


# ---------------------------------------------------------------------------
# load_level
# ---------------------------------------------------------------------------


class TestLoadLevel:
    def test_by_number(self):
        assert load_level("basic_triads", 1).level_id == "basic-triads-level1"

    def test_by_level_id(self):
        assert load_level("basic_triads", "basic-triads-level2").level_id == "basic-triads-level2"

    def test_by_numeric_string(self):
        assert load_level("seventh_chords", "3").level_id == "seventh-chords-level3"

    def test_hyphenated_category(self):
        assert load_level("basic-triads", 1).level_id == "basic-triads-level1"

    def test_title_case_category(self):
        assert load_level("Extended Chords", 2).level_id == "extended-chords-level2"

    def test_unknown_level(self):
        with pytest.raises(LevelNotFound, match="not found"):
            load_level("basic_triads", 99)

    def test_unknown_category(self):
        with pytest.raises(LevelNotFound):
            load_level("counterpoint", 1)

    def test_level_not_found_is_value_error(self):
        with pytest.raises(ValueError):
            load_level("basic_triads", 0)

    def test_get_level_across_categories(self):
        assert get_level("seventh-chords-level2").constraint.required_inversion == "first"

    def test_get_level_unknown(self):
        with pytest.raises(LevelNotFound):
            get_level("basic-triads-level9")

    def test_category_cached(self):
        assert _load_category("basic_triads") is _load_category("basic_triads")


# ---------------------------------------------------------------------------
# Curriculum
# ---------------------------------------------------------------------------


class TestBasicTriads:
    def test_level1_root_position(self):
        level = load_level("basic_triads", 1)
        assert level.constraint.allowed_roots == _NATURAL_ROOTS
        assert level.constraint.allowed_qualities == _TRIADS
        assert not level.constraint.allow_inversions
        assert level.total_problems == 20
        assert level.pass_accuracy == 85.0
        assert level.pass_time == 10.0
        assert level.difficulty == "Beginner"
        assert level.answer_mode == "notes"

    def test_level2_requires_first_inversion(self):
        constraint = load_level("basic_triads", 2).constraint
        assert constraint.allow_inversions
        assert constraint.required_inversion == "first"

    def test_level3_any_triad_inversion(self):
        constraint = load_level("basic_triads", 3).constraint
        assert constraint.allowed_inversions == ("root", "first", "second")
        assert constraint.required_inversion is None

    def test_inversion_labels_optional(self):
        assert not load_level("basic_triads", 2).require_inversion_label

    def test_level4_is_text_mode(self):
        assert load_level("basic_triads", 4).answer_mode == "text"

    def test_level5_open_voicing(self):
        level = load_level("basic_triads", 5)
        assert level.constraint.voicing == "open"
        assert level.constraint.spread_range == (12, 24)
        assert len(level.constraint.allowed_roots) == 12
        assert not level.constraint.allow_inversions
        assert (level.total_problems, level.pass_accuracy, level.pass_time) == (30, 75.0, 12.0)

    def test_close_voicing_by_default(self):
        assert load_level("basic_triads", 1).constraint.voicing == "close"


class TestSeventhChords:
    def test_level1(self):
        level = load_level("seventh_chords", 1)
        assert level.constraint.allowed_qualities == ("major7", "minor7", "dominant7")
        assert level.pass_time == 12.0
        assert level.difficulty == "Intermediate"

    def test_level3_all_inversions(self):
        constraint = load_level("seventh_chords", 3).constraint
        assert constraint.allow_inversions
        assert constraint.allowed_inversions == ()

    def test_level4_overrides(self):
        level = load_level("seventh_chords", 4)
        assert "half_diminished7" in level.constraint.allowed_qualities
        assert level.require_inversion_label
        assert level.pass_time == 15.0

    def test_level5_open_voicing(self):
        level = load_level("seventh_chords", 5)
        assert level.constraint.voicing == "open"
        assert "diminished7" in level.constraint.allowed_qualities
        assert level.pass_accuracy == 75.0

class TestExtendedChords:
    def test_ninths(self):
        level = load_level("extended_chords", 1)
        assert level.constraint.allowed_qualities == ("maj9", "min9", "dom9")
        assert (level.pass_accuracy, level.pass_time, level.total_problems) == (80.0, 15.0, 15)

    def test_elevenths(self):
        level = load_level("extended_chords", 2)
        assert level.constraint.allowed_qualities == ("maj11", "min11")
        assert level.pass_time == 18.0

    def test_thirteenths(self):
        level = load_level("extended_chords", 3)
        assert level.constraint.allowed_qualities == ("maj13", "min13")
        assert (level.pass_time, level.total_problems) == (20.0, 12)

    def test_root_position_only(self):
        for number in (1, 2, 3):
            assert not load_level("extended_chords", number).constraint.allow_inversions

    def test_difficulty(self):
        assert load_level("extended_chords", 1).difficulty == "Advanced"


class TestEveryLevelGenerates:
    @pytest.mark.parametrize("level_id", available_levels())
    def test_generates(self, level_id):
        level = get_level(level_id)
        rng = random.Random(level_id)
        previous = None
        for _ in range(20):
            previous = generate(level.constraint, previous, rng=rng)
            assert previous.quality.id in level.constraint.allowed_qualities


# ---------------------------------------------------------------------------
# level_from_dict
# ---------------------------------------------------------------------------


class TestLevelFromDict:
    def test_minimal(self):
        level = level_from_dict({"level_id": "custom", "roots": ["C"], "qualities": ["major"]})
        assert level.title == "custom"
        assert level.constraint.allowed_roots == ("C",)
        assert level.total_problems == 20
        assert level.require_inversion_label

    def test_defaults_then_overrides(self):
        level = level_from_dict(
            {"level_id": "x", "pass_time": 30},
            {"roots": ["D"], "qualities": ["minor"], "pass_time": 10},
        )
        assert level.pass_time == 30.0
        assert level.constraint.allowed_roots == ("D",)

    def test_required_inversion_implies_inversions(self):
        level = level_from_dict(
            {"level_id": "x", "roots": ["C"], "qualities": ["major"], "required_inversion": "second"}
        )
        assert level.constraint.allow_inversions

    def test_custom_anchors(self):
        level = level_from_dict(
            {"level_id": "x", "roots": ["C"], "qualities": ["major"], "octave_choices": [36]}
        )
        assert level.constraint.octave_choices == (36,)

    def test_missing_id(self):
        with pytest.raises(ValueError, match="no level_id"):
            level_from_dict({"roots": ["C"], "qualities": ["major"]})

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="answer_mode"):
            level_from_dict({"level_id": "x", "answer_mode": "audio"})

    def test_open_voicing_keys(self):
        level = level_from_dict(
            {
                "level_id": "x",
                "roots": ["C"],
                "qualities": ["major"],
                "voicing": "open",
                "spread_range": [14, 20],
            }
        )
        assert level.constraint.voicing == "open"
        assert level.constraint.spread_range == (14, 20)

    def test_unknown_voicing(self):
        with pytest.raises(ValueError, match="voicing"):
            level_from_dict({"level_id": "x", "voicing": "drop2"})
