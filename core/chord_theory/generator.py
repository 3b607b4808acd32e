"""
core/chord_theory/generator.py — Procedural chord exercise generator.

generate() draws one ChordInstance under a LevelConstraint:
    1. Pick a root and a quality uniformly from the constraint
    2. Resolve the inversion:
         inversions not allowed    → root position
         required inversion        → that inversion with probability
                                     required_inversion_weight, else root
         otherwise                 → uniform over allowed_inversions, or over
                                     every inversion the quality supports
    3. A quality that cannot take the drawn inversion is resampled from the
       qualities that can; with none eligible the chord falls back to root
    4. Pick an octave anchor (root position and inversions use separate sets)
    5. Voice through the inversion model, then transpose the whole chord by
       octaves into the configured pitch window
       (open-voicing levels first spread the upper tones by a spread drawn
       from spread_range)
    6. Repeat (bounded by config.max_attempts) while the draw has the same
       (root, quality, inversion) identity as the previous exercise

Design decisions:
    - Deterministic for a given random.Random / seed
    - Bounded loop, never recursion; after max_attempts the last draw is
      accepted and a warning is logged (strict=True raises instead)
    - build_instance() is the deterministic half, also used to rehydrate
      exercises a host serialized with ChordInstance.to_dict()
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any

from core.chord_theory.catalog import lookup
from core.chord_theory.errors import EmptyConstraintSet, GenerationExhausted
from core.chord_theory.inversions import (
    apply_inversion,
    available_inversions,
    bass_pitch_class,
    fit_to_window,
    inversion_spec,
    open_voicing,
)
from core.chord_theory.pitch import root_pitch_class, spell
from core.chord_theory.types import INVERSION_IDS, ChordInstance, ChordQuality, LevelConstraint
from core.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)

# A triad or seventh chord opened by spread s >= 12 spans at most s + 11
# semitones; octave shifts need another 11 of slack inside the window.
_OPEN_FIT_MARGIN: int = 22


# ---------------------------------------------------------------------------
# Deterministic construction
# ---------------------------------------------------------------------------


def _prefers_flats(name: str) -> bool:
    stripped = name.strip()
    return len(stripped) == 2 and stripped[1] == "b"


def build_instance(
    root: str,
    quality_id: str,
    inversion_id: str = "root",
    octave_base: int = 60,
    *,
    spread: int = 0,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ChordInstance:
    """Construct the exercise chord for a fixed root, quality and inversion.

    Args:
        root:         Root spelling, e.g. "D", "f#", "Bb". Flat spellings keep
                      flats in the names; everything else is spelled with sharps.
        quality_id:   Catalog id or alias
        inversion_id: One of INVERSION_IDS
        octave_base:  MIDI C the root is built from (48 = C3, 60 = C4)
        spread:       Open-voicing spread in semitones; 0 keeps the close voicing
        config:       Engine config supplying the pitch window

    Returns:
        ChordInstance with notes inside [config.pitch_low, config.pitch_high]

    Raises:
        InvalidNoteName:      Unrecognized root spelling
        UnknownQuality:       Quality id not in the catalog
        UnsupportedInversion: Quality is not drilled in that inversion
        ValueError:           Negative spread, or a voicing wider than the window

    Examples:
        >>> build_instance("C", "major").notes
        (60, 64, 67)
        >>> build_instance("D", "minor7", "first").canonical_name
        'Dm7/F'
    """
    root_pc = root_pitch_class(root)
    quality = lookup(quality_id)
    spec = inversion_spec(quality, inversion_id)
    flats = _prefers_flats(root)
    root_name = spell(root_pc, flats=flats)

    voiced = apply_inversion(quality, inversion_id, octave_base + root_pc)
    if spread:
        voiced = open_voicing(voiced, spread)
    notes = fit_to_window(voiced, config.pitch_low, config.pitch_high)
    shift = notes[0] - voiced[0]

    if spec.is_root_position:
        canonical_name = f"{root_name}{quality.symbol}"
        description = f"{root_name} {quality.display_name}"
    else:
        bass_name = spell(bass_pitch_class(root_pc, quality, inversion_id), flats=flats)
        canonical_name = f"{root_name}{quality.symbol}/{bass_name}"
        description = f"{root_name} {quality.display_name} in {spec.label.lower()}"
    if spread:
        description += " (open voicing)"

    return ChordInstance(
        root=root_pc,
        root_name=root_name,
        quality=quality,
        inversion=spec,
        octave_base=octave_base + shift,
        notes=notes,
        canonical_name=canonical_name,
        description=description,
        spread=spread,
    )


def instance_from_dict(
    data: Mapping[str, Any], *, config: EngineConfig = DEFAULT_CONFIG
) -> ChordInstance:
    """Rebuild a ChordInstance from its to_dict() form.

    Raises:
        KeyError:   If root or quality is missing
        ValueError: If the stored notes disagree with the rebuilt voicing
    """
    instance = build_instance(
        data["root"],
        data["quality"],
        data.get("inversion", "root"),
        data.get("octave_base", 60),
        spread=int(data.get("spread", 0)),
        config=config,
    )
    stored = data.get("notes")
    if stored is not None and tuple(stored) != instance.notes:
        raise ValueError(
            f"Stored notes {tuple(stored)} do not match {instance.canonical_name} "
            f"voiced as {instance.notes}"
        )
    return instance


# ---------------------------------------------------------------------------
# Random draws
# ---------------------------------------------------------------------------


def _supports(quality: ChordQuality, inversion_id: str) -> bool:
    return INVERSION_IDS.index(inversion_id) <= quality.max_inversion


def _draw_inversion(
    constraint: LevelConstraint,
    quality: ChordQuality,
    rng: random.Random,
    weight: float,
) -> str:
    if not constraint.allow_inversions:
        return "root"
    if constraint.required_inversion is not None:
        return constraint.required_inversion if rng.random() < weight else "root"
    if constraint.allowed_inversions:
        return rng.choice(constraint.allowed_inversions)
    return rng.choice(available_inversions(quality)).id


def _draw(
    constraint: LevelConstraint,
    qualities: Sequence[ChordQuality],
    rng: random.Random,
    weight: float,
    config: EngineConfig,
) -> ChordInstance:
    root = rng.choice(constraint.allowed_roots)
    quality = rng.choice(qualities)
    inversion_id = _draw_inversion(constraint, quality, rng, weight)

    if not _supports(quality, inversion_id):
        eligible = [q for q in qualities if _supports(q, inversion_id)]
        if eligible:
            quality = rng.choice(eligible)
        else:
            inversion_id = "root"

    anchors = (
        constraint.octave_choices if inversion_id == "root" else constraint.inversion_octave_choices
    )
    octave_base = rng.choice(anchors)
    spread = 0
    if constraint.voicing == "open":
        drawn = rng.randint(*constraint.spread_range)
        spread = min(drawn, config.window_span - _OPEN_FIT_MARGIN)
    return build_instance(
        root, quality.id, inversion_id, octave_base, spread=spread, config=config
    )


def generate(
    constraint: LevelConstraint,
    previous: ChordInstance | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
    strict: bool = False,
) -> ChordInstance:
    """Generate one exercise chord under a level constraint.

    Args:
        constraint: What the level allows
        previous:   The exercise just finished; its (root, quality, inversion)
                    identity is avoided
        rng:        Random source. Takes precedence over seed.
        seed:       Seed for a fresh random.Random when rng is not given
        config:     Pitch window, attempt bound, default inversion weight
        strict:     Raise GenerationExhausted instead of accepting a repeat

    Returns:
        A ChordInstance with strictly ascending notes inside the pitch window

    Raises:
        EmptyConstraintSet:  No roots or no qualities to pick from
        InvalidNoteName:     A root in the constraint is not a note name
        UnknownQuality:      A quality in the constraint is not in the catalog
        GenerationExhausted: strict=True and every attempt repeated previous

    Example:
        >>> constraint = LevelConstraint(("C", "F", "G"), ("major", "minor"))
        >>> first = generate(constraint, seed=1)
        >>> second = generate(constraint, first, seed=2)
        >>> first.identity != second.identity
        True
    """
    if not constraint.allowed_roots:
        raise EmptyConstraintSet("allowed_roots")
    if not constraint.allowed_qualities:
        raise EmptyConstraintSet("allowed_qualities")

    # Fail on bad level data before drawing anything
    for root in constraint.allowed_roots:
        root_pitch_class(root)
    qualities = tuple(lookup(quality_id) for quality_id in constraint.allowed_qualities)

    if rng is None:
        rng = random.Random(seed)
    weight = (
        constraint.required_inversion_weight
        if constraint.required_inversion_weight is not None
        else config.required_inversion_weight
    )

    candidate = _draw(constraint, qualities, rng, weight, config)
    attempts = 1
    while previous is not None and candidate.identity == previous.identity:
        if attempts >= config.max_attempts:
            if strict:
                raise GenerationExhausted(attempts, previous.identity)
            logger.warning(
                "Duplicate avoidance exhausted after %d attempts; repeating %s",
                attempts,
                candidate.canonical_name,
            )
            break
        logger.debug("Attempt %d repeated %s, redrawing", attempts, candidate.canonical_name)
        candidate = _draw(constraint, qualities, rng, weight, config)
        attempts += 1

    return candidate
