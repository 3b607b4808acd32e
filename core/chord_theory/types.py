"""
core/chord_theory/types.py — Frozen value objects for the chord drill engine.

All types are immutable frozen dataclasses — safe to hash, cache, and pass
between the generator, validator and session without copying.
No I/O, no side effects, no external dependencies beyond stdlib.

Types:
    ChordQuality      — a chord type: interval set, symbol, abbreviations
    InversionSpec     — one inversion of a quality as an index permutation
    ChordInstance     — a generated exercise chord (voiced notes + names)
    LevelConstraint   — what a level allows the generator to pick
    LevelConfig       — a full level: constraint + pass thresholds
    SubmissionResult  — the outcome of one answer
    SessionScore      — running correct/total/streak counters
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------

#: Inversion ids in bass-tone order (index == rotation amount)
INVERSION_IDS: tuple[str, ...] = ("root", "first", "second", "third", "fourth")

#: Chord families in ascending complexity
CHORD_FAMILIES: frozenset[str] = frozenset(
    {"triad", "suspended", "seventh", "ninth", "eleventh", "thirteenth"}
)

ANSWER_MODES: frozenset[str] = frozenset({"notes", "text"})

VOICINGS: tuple[str, ...] = ("close", "open")

#: Widest open-voicing spread a level may ask for, in semitones
MAX_OPEN_SPREAD: int = 24


# ---------------------------------------------------------------------------
# ChordQuality
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordQuality:
    """A chord type defined by its intervals above the root.

    Attributes:
        id:            Catalog key, e.g. "major", "minor7", "dom13"
        display_name:  Human-readable name, e.g. "Minor 7th"
        symbol:        Canonical chord-symbol suffix, e.g. "", "m7", "maj9"
        intervals:     Semitone offsets from the root, strictly increasing, first 0
        abbreviations: Alternative suffixes a student may type ("min7", "-7")
        family:        One of CHORD_FAMILIES ("triad", "seventh", ...)
        max_inversion: Highest inversion index this quality is drilled in.
                       0 means root position only (e.g. augmented triads).
    """

    id: str
    display_name: str
    symbol: str
    intervals: tuple[int, ...]
    abbreviations: tuple[str, ...] = ()
    family: str = "triad"
    max_inversion: int = 0

    @property
    def note_count(self) -> int:
        """Number of chord tones."""
        return len(self.intervals)

    @property
    def invertible(self) -> bool:
        """True if the quality may be drilled in any inversion."""
        return self.max_inversion > 0

    @property
    def pitch_class_offsets(self) -> tuple[int, ...]:
        """Intervals reduced modulo 12, in chord-tone order."""
        return tuple(i % 12 for i in self.intervals)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ChordQuality.id must not be empty")
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"ChordQuality {self.id!r}: intervals must start at 0")
        for lower, upper in zip(self.intervals, self.intervals[1:], strict=False):
            if upper <= lower:
                raise ValueError(
                    f"ChordQuality {self.id!r}: intervals must be strictly increasing, "
                    f"got {self.intervals}"
                )
        if self.family not in CHORD_FAMILIES:
            raise ValueError(
                f"ChordQuality {self.id!r}: unknown family {self.family!r}. "
                f"Valid: {sorted(CHORD_FAMILIES)}"
            )
        if not (0 <= self.max_inversion < self.note_count):
            raise ValueError(
                f"ChordQuality {self.id!r}: max_inversion must be in "
                f"[0, {self.note_count - 1}], got {self.max_inversion}"
            )


# ---------------------------------------------------------------------------
# InversionSpec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InversionSpec:
    """One inversion of a chord, expressed as a reordering of chord tones.

    Attributes:
        id:             One of INVERSION_IDS
        interval_order: Permutation of chord-tone indices, bass first.
                        Root position is the identity permutation.
    """

    id: str
    interval_order: tuple[int, ...]

    @property
    def index(self) -> int:
        """0 for root position, 1 for first inversion, and so on."""
        return INVERSION_IDS.index(self.id)

    @property
    def is_root_position(self) -> bool:
        return self.id == "root"

    @property
    def label(self) -> str:
        """Display label, e.g. 'Root Position', '1st Inversion'."""
        if self.is_root_position:
            return "Root Position"
        ordinals = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}
        return f"{ordinals[self.index]} Inversion"

    def __post_init__(self) -> None:
        if self.id not in INVERSION_IDS:
            raise ValueError(
                f"Unknown inversion id {self.id!r}. Valid: {list(INVERSION_IDS)}"
            )
        if sorted(self.interval_order) != list(range(len(self.interval_order))):
            raise ValueError(
                f"InversionSpec.interval_order must be a permutation, got {self.interval_order}"
            )


# ---------------------------------------------------------------------------
# ChordInstance
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordInstance:
    """A concrete generated exercise chord.

    Created fresh per problem by the generator and never mutated; it is
    discarded when the next problem is generated or the session resets.

    Attributes:
        root:           Root pitch class (0–11)
        root_name:      Root spelling used in names, e.g. "C#"
        quality:        The ChordQuality drilled
        inversion:      The InversionSpec applied
        octave_base:    MIDI number of the C the root was built from (48 = C3),
                        after any transposition into the pitch window
        notes:          Voiced MIDI notes, strictly ascending
        canonical_name: Authoritative name, e.g. "Cmaj7/E"
        description:    Prompt text, e.g. "C Major 7th in 1st inversion"
        spread:         Open-voicing spread in semitones; 0 for close voicing
    """

    root: int
    root_name: str
    quality: ChordQuality
    inversion: InversionSpec
    octave_base: int
    notes: tuple[int, ...]
    canonical_name: str
    description: str
    spread: int = 0

    @property
    def identity(self) -> tuple[int, str, str]:
        """(root, quality id, inversion id) — what counts as "the same problem"."""
        return (self.root, self.quality.id, self.inversion.id)

    @property
    def bass_note(self) -> int:
        """Lowest voiced MIDI note."""
        return self.notes[0]

    @property
    def bass_pitch_class(self) -> int:
        return self.notes[0] % 12

    @property
    def voicing(self) -> str:
        return "open" if self.spread else "close"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view for hosts (JSON-serializable)."""
        return {
            "root": self.root_name,
            "root_pitch_class": self.root,
            "quality": self.quality.id,
            "quality_name": self.quality.display_name,
            "inversion": self.inversion.id,
            "octave_base": self.octave_base,
            "notes": list(self.notes),
            "canonical_name": self.canonical_name,
            "description": self.description,
            "voicing": self.voicing,
            "spread": self.spread,
        }

    def __post_init__(self) -> None:
        if not (0 <= self.root <= 11):
            raise ValueError(f"ChordInstance.root must be in [0, 11], got {self.root}")
        if self.spread < 0:
            raise ValueError(f"ChordInstance.spread must be >= 0, got {self.spread}")
        if len(self.notes) != self.quality.note_count:
            raise ValueError(
                f"ChordInstance has {len(self.notes)} notes, "
                f"quality {self.quality.id!r} needs {self.quality.note_count}"
            )
        for lower, upper in zip(self.notes, self.notes[1:], strict=False):
            if upper <= lower:
                raise ValueError(f"ChordInstance.notes must be strictly ascending, got {self.notes}")
        if len(self.inversion.interval_order) != self.quality.note_count:
            raise ValueError(
                f"Inversion order {self.inversion.interval_order} does not match "
                f"{self.quality.note_count}-note quality {self.quality.id!r}"
            )


# ---------------------------------------------------------------------------
# LevelConstraint / LevelConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LevelConstraint:
    """What the generator may pick for a level.

    Emptiness of allowed_roots / allowed_qualities is not checked here: the
    generator reports it as EmptyConstraintSet when asked to generate.

    Attributes:
        allowed_roots:             Root spellings, e.g. ("C", "F#", "Bb")
        allowed_qualities:         Catalog quality ids
        allow_inversions:          False → root position only
        required_inversion:        Drill this inversion (mixed with root position)
        required_inversion_weight: Probability of the required inversion
                                   rather than root position. None → engine default.
        allowed_inversions:        Explicit inversion pool when inversions are
                                   allowed and none is required. Empty → every
                                   inversion the quality supports.
        octave_choices:            Octave anchors (MIDI C) for root position
        inversion_octave_choices:  Octave anchors for inverted chords
        voicing:                   "close", or "open" to spread the upper tones
        spread_range:              (min, max) open-voicing spread in semitones,
                                   drawn uniformly per problem
    """

    allowed_roots: tuple[str, ...]
    allowed_qualities: tuple[str, ...]
    allow_inversions: bool = False
    required_inversion: str | None = None
    required_inversion_weight: float | None = None
    allowed_inversions: tuple[str, ...] = ()
    octave_choices: tuple[int, ...] = (48, 60, 72)
    inversion_octave_choices: tuple[int, ...] = (48, 60)
    voicing: str = "close"
    spread_range: tuple[int, int] = (12, 24)

    def __post_init__(self) -> None:
        if self.required_inversion is not None and self.required_inversion not in INVERSION_IDS:
            raise ValueError(
                f"Unknown required_inversion {self.required_inversion!r}. "
                f"Valid: {list(INVERSION_IDS)}"
            )
        for inversion_id in self.allowed_inversions:
            if inversion_id not in INVERSION_IDS:
                raise ValueError(
                    f"Unknown inversion {inversion_id!r} in allowed_inversions. "
                    f"Valid: {list(INVERSION_IDS)}"
                )
        weight = self.required_inversion_weight
        if weight is not None and not (0.0 <= weight <= 1.0):
            raise ValueError(f"required_inversion_weight must be in [0, 1], got {weight}")
        if not self.octave_choices:
            raise ValueError("LevelConstraint.octave_choices must not be empty")
        if not self.inversion_octave_choices:
            raise ValueError("LevelConstraint.inversion_octave_choices must not be empty")
        for anchor in (*self.octave_choices, *self.inversion_octave_choices):
            if not (0 <= anchor <= 127) or anchor % 12 != 0:
                raise ValueError(f"Octave anchor must be a MIDI C in [0, 127], got {anchor}")
        if self.voicing not in VOICINGS:
            raise ValueError(f"Unknown voicing {self.voicing!r}. Valid: {list(VOICINGS)}")
        if len(self.spread_range) != 2:
            raise ValueError(f"spread_range must be (min, max), got {self.spread_range}")
        low, high = self.spread_range
        if not (0 < low <= high <= MAX_OPEN_SPREAD):
            raise ValueError(
                f"spread_range must satisfy 0 < min <= max <= {MAX_OPEN_SPREAD}, "
                f"got {self.spread_range}"
            )


@dataclass(frozen=True)
class LevelConfig:
    """A drill level: generation constraint plus pass requirements.

    Attributes:
        level_id:                Stable id, e.g. "basic-triads-level2"
        title:                   Display title
        constraint:              LevelConstraint fed to the generator
        total_problems:          Problems per session
        pass_accuracy:           Minimum accuracy in percent (0–100)
        pass_time:               Maximum average seconds per problem
        answer_mode:             "notes" (build on piano roll) or "text" (name it)
        require_inversion_label: Text answers to inverted chords must name the inversion
        description:             Short blurb
        difficulty:              "Beginner", "Intermediate", ...
    """

    level_id: str
    title: str
    constraint: LevelConstraint
    total_problems: int = 20
    pass_accuracy: float = 85.0
    pass_time: float = 10.0
    answer_mode: str = "notes"
    require_inversion_label: bool = True
    description: str = ""
    difficulty: str = ""

    def __post_init__(self) -> None:
        if not self.level_id:
            raise ValueError("LevelConfig.level_id must not be empty")
        if self.total_problems <= 0:
            raise ValueError(f"total_problems must be > 0, got {self.total_problems}")
        if not (0.0 <= self.pass_accuracy <= 100.0):
            raise ValueError(f"pass_accuracy must be in [0, 100], got {self.pass_accuracy}")
        if self.pass_time <= 0:
            raise ValueError(f"pass_time must be > 0, got {self.pass_time}")
        if self.answer_mode not in ANSWER_MODES:
            raise ValueError(
                f"Unknown answer_mode {self.answer_mode!r}. Valid: {sorted(ANSWER_MODES)}"
            )


# ---------------------------------------------------------------------------
# SubmissionResult / SessionScore
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one answer. Consumed by the session, then by presentation."""

    is_correct: bool
    expected_notes: tuple[int, ...]
    submitted_notes: tuple[int, ...]
    elapsed_time: float
    expected_name: str = ""
    submitted_text: str | None = None

    def __post_init__(self) -> None:
        if self.elapsed_time < 0:
            raise ValueError(f"elapsed_time must be >= 0, got {self.elapsed_time}")


@dataclass(frozen=True)
class SessionScore:
    """Running counters, replaced (never mutated) on each submission."""

    correct: int = 0
    total: int = 0
    streak: int = 0
    best_streak: int = 0

    @property
    def accuracy(self) -> float:
        """Percent correct, 0.0 before the first answer."""
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100

    def record(self, is_correct: bool) -> SessionScore:
        """Return the score after one more answer."""
        streak = self.streak + 1 if is_correct else 0
        return SessionScore(
            correct=self.correct + (1 if is_correct else 0),
            total=self.total + 1,
            streak=streak,
            best_streak=max(self.best_streak, streak),
        )

    def __post_init__(self) -> None:
        if min(self.correct, self.total, self.streak, self.best_streak) < 0:
            raise ValueError("SessionScore counters must be >= 0")
        if self.correct > self.total:
            raise ValueError(
                f"SessionScore.correct ({self.correct}) cannot exceed total ({self.total})"
            )


#: Convenience default used by new sessions
EMPTY_SCORE = SessionScore()