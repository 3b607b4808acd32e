"""
core/chord_theory/levels.py — Drill level definitions.

YAML Level Files
----------------
Located in core/chord_theory/levels/<category>.yaml, one file per category.
Each file holds a `defaults` mapping and a `levels` list; every level entry
overrides the defaults it names. Files are loaded lazily on first use and
cached as tuples of frozen LevelConfig objects.

Level entry keys:
    level, level_id, title, description, difficulty
    roots, qualities
    allow_inversions, required_inversion, required_inversion_weight,
    allowed_inversions, octave_choices, inversion_octave_choices
    voicing, spread_range
    total_problems, pass_accuracy, pass_time
    answer_mode, require_inversion_label

Exports:
    available_categories() → list[str]
    available_levels(category) → list[str]
    load_level(category, level) → LevelConfig
    get_level(level_id) → LevelConfig
    level_from_dict(data, defaults) → LevelConfig
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from core.chord_theory.errors import LevelNotFound
from core.chord_theory.types import LevelConfig, LevelConstraint

logger = logging.getLogger(__name__)

_LEVELS_DIR: Path = Path(__file__).parent / "levels"

# Category slug → file name
_CATEGORY_FILES: dict[str, str] = {
    "basic_triads": "basic_triads.yaml",
    "seventh_chords": "seventh_chords.yaml",
    "extended_chords": "extended_chords.yaml",
}

_CONSTRAINT_DEFAULTS = LevelConstraint(allowed_roots=(), allowed_qualities=())


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _normalize_category(category: str) -> str:
    return category.strip().lower().replace("-", "_").replace(" ", "_")


def level_from_dict(
    data: Mapping[str, Any], defaults: Mapping[str, Any] | None = None
) -> LevelConfig:
    """Build a LevelConfig from a level mapping (YAML entry or host dict).

    Args:
        data:     Level entry; keys as listed in the module docstring
        defaults: Values used for keys the entry does not set

    Returns:
        Validated LevelConfig

    Raises:
        ValueError: If level_id is missing or a value fails validation
    """
    merged: dict[str, Any] = {**(defaults or {}), **data}
    level_id = merged.get("level_id")
    if not level_id:
        raise ValueError(f"Level entry has no level_id: {dict(data)}")

    required = merged.get("required_inversion")
    constraint = LevelConstraint(
        allowed_roots=tuple(str(root) for root in merged.get("roots", ())),
        allowed_qualities=tuple(merged.get("qualities", ())),
        allow_inversions=bool(merged.get("allow_inversions", required is not None)),
        required_inversion=required,
        required_inversion_weight=merged.get("required_inversion_weight"),
        allowed_inversions=tuple(merged.get("allowed_inversions", ())),
        octave_choices=tuple(merged.get("octave_choices", _CONSTRAINT_DEFAULTS.octave_choices)),
        inversion_octave_choices=tuple(
            merged.get("inversion_octave_choices", _CONSTRAINT_DEFAULTS.inversion_octave_choices)
        ),
        voicing=str(merged.get("voicing", _CONSTRAINT_DEFAULTS.voicing)),
        spread_range=tuple(merged.get("spread_range", _CONSTRAINT_DEFAULTS.spread_range)),
    )
    return LevelConfig(
        level_id=str(level_id),
        title=str(merged.get("title", level_id)),
        constraint=constraint,
        total_problems=int(merged.get("total_problems", 20)),
        pass_accuracy=float(merged.get("pass_accuracy", 85.0)),
        pass_time=float(merged.get("pass_time", 10.0)),
        answer_mode=str(merged.get("answer_mode", "notes")),
        require_inversion_label=bool(merged.get("require_inversion_label", True)),
        description=str(merged.get("description", "")),
        difficulty=str(merged.get("difficulty", "")),
    )


# ---------------------------------------------------------------------------
# YAML loading — lazy, cached
# ---------------------------------------------------------------------------


@functools.cache
def _load_category(category: str) -> tuple[tuple[int, LevelConfig], ...]:
    """Load and cache one category file as (level number, LevelConfig) pairs.

    Raises:
        LevelNotFound: If the category is unknown
        ValueError:    If the file is missing or malformed
    """
    try:
        import yaml  # pyyaml
    except ImportError as exc:
        raise ImportError(
            "pyyaml is required for level definitions. Install with: pip install pyyaml"
        ) from exc

    filename = _CATEGORY_FILES.get(category)
    if filename is None:
        raise LevelNotFound(
            f"Unknown level category {category!r}. Available: {sorted(_CATEGORY_FILES)}"
        )
    path = _LEVELS_DIR / filename
    if not path.exists():
        raise ValueError(f"Level file not found: {path}")

    with path.open(encoding="utf-8") as fh:
        document = yaml.safe_load(fh) or {}

    defaults = {
        "difficulty": document.get("difficulty", ""),
        **(document.get("defaults") or {}),
    }
    levels: list[tuple[int, LevelConfig]] = []
    for position, entry in enumerate(document.get("levels") or [], start=1):
        number = int(entry.get("level", position))
        levels.append((number, level_from_dict(entry, defaults)))

    logger.debug("Loaded %d levels from %s", len(levels), path.name)
    return tuple(levels)


def available_categories() -> list[str]:
    """Return the level category slugs, sorted."""
    return sorted(_CATEGORY_FILES)


def available_levels(category: str | None = None) -> list[str]:
    """Return level ids of one category, or of every category when None."""
    categories = (
        [_normalize_category(category)] if category is not None else available_categories()
    )
    return [config.level_id for slug in categories for _, config in _load_category(slug)]


def load_level(category: str, level: int | str) -> LevelConfig:
    """Return one level of a category.

    Args:
        category: Category slug; "basic-triads" and "Basic Triads" also work
        level:    Level number within the category, or a level_id

    Raises:
        LevelNotFound: If the category or level does not exist
    """
    slug = _normalize_category(category)
    for number, config in _load_category(slug):
        if level == number or level == config.level_id:
            return config
    if isinstance(level, str) and level.isdigit():
        return load_level(slug, int(level))
    raise LevelNotFound(f"Level {level!r} not found in category {slug!r}")


def get_level(level_id: str) -> LevelConfig:
    """Find a level by id across every category.

    Raises:
        LevelNotFound: If no category defines the id
    """
    for slug in available_categories():
        for _, config in _load_category(slug):
            if config.level_id == level_id:
                return config
    raise LevelNotFound(f"Unknown level id {level_id!r}")
