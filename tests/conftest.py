"""
Shared fixtures for the test suite.

Centralizes reusable chord drill fixtures so individual test files
don't need to rebuild constraints, levels and exercises.
"""

import random

import pytest

from core.chord_theory.generator import build_instance
from core.chord_theory.types import ChordInstance, LevelConfig, LevelConstraint

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NATURAL_ROOTS: tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")
"""Root set used by the built-in levels."""

TRIADS: tuple[str, ...] = ("major", "minor", "diminished", "augmented")


# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------


@pytest.fixture()
def rng() -> random.Random:
    """Seeded random source: every test sees the same sequence."""
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Constraints and levels
# ---------------------------------------------------------------------------


@pytest.fixture()
def triad_constraint() -> LevelConstraint:
    """Root-position triads on the natural roots."""
    return LevelConstraint(allowed_roots=NATURAL_ROOTS, allowed_qualities=TRIADS)


@pytest.fixture()
def inversion_constraint() -> LevelConstraint:
    """Triads in any supported inversion."""
    return LevelConstraint(
        allowed_roots=NATURAL_ROOTS, allowed_qualities=TRIADS, allow_inversions=True
    )


def _make_level(**overrides: object) -> LevelConfig:
    """Build a small LevelConfig; keyword arguments override the defaults."""
    defaults: dict[str, object] = {
        "level_id": "test-level",
        "title": "Test Level",
        "constraint": LevelConstraint(allowed_roots=NATURAL_ROOTS, allowed_qualities=TRIADS),
        "total_problems": 4,
        "pass_accuracy": 75.0,
        "pass_time": 10.0,
    }
    defaults.update(overrides)
    return LevelConfig(**defaults)  # type: ignore[arg-type]


@pytest.fixture()
def make_level():
    """Factory fixture: make_level(total_problems=2, ...) → LevelConfig."""
    return _make_level


@pytest.fixture()
def small_level() -> LevelConfig:
    return _make_level()


# ---------------------------------------------------------------------------
# Exercise chords
# ---------------------------------------------------------------------------


@pytest.fixture()
def c_major() -> ChordInstance:
    """C major, root position, built from C4 → (60, 64, 67)."""
    return build_instance("C", "major", "root", 60)


@pytest.fixture()
def d_minor7_first() -> ChordInstance:
    """D minor 7th in first inversion, F in the bass."""
    return build_instance("D", "minor7", "first", 60)


@pytest.fixture()
def c_augmented() -> ChordInstance:
    return build_instance("C", "augmented", "root", 60)
