"""
core/chord_theory/ — Pure chord theory engine for chord drills.

Exports:
    Types:      ChordQuality, InversionSpec, ChordInstance, LevelConstraint,
                LevelConfig, SubmissionResult, SessionScore, INVERSION_IDS
    Errors:     ChordTheoryError, InvalidNoteName, UnknownQuality,
                UnsupportedInversion, EmptyConstraintSet, GenerationExhausted,
                LevelNotFound, InvalidTransition
    Pitch:      pitch_class_of, note_name, is_black_key, root_pitch_class
    Catalog:    CATALOG, lookup, quality_for_symbol
    Inversions: apply_inversion, inversion_spec, bass_pitch_class, fit_to_window
    Generator:  generate, build_instance, instance_from_dict
    Validator:  validate_notes, validate_text, validate_answer, acceptable_answers
    Session:    SessionPhase, SessionState, SessionSummary, new_session, start,
                submit, advance_session, advance, reset, summarize
    Levels:     load_level, get_level, available_levels, available_categories
"""

from core.chord_theory.catalog import CATALOG, lookup, quality_for_symbol
from core.chord_theory.errors import (
    ChordTheoryError,
    EmptyConstraintSet,
    GenerationExhausted,
    InvalidNoteName,
    InvalidTransition,
    LevelNotFound,
    UnknownQuality,
    UnsupportedInversion,
)
from core.chord_theory.generator import build_instance, generate, instance_from_dict
from core.chord_theory.inversions import (
    apply_inversion,
    bass_pitch_class,
    fit_to_window,
    inversion_spec,
)
from core.chord_theory.levels import (
    available_categories,
    available_levels,
    get_level,
    load_level,
)
from core.chord_theory.pitch import is_black_key, note_name, pitch_class_of, root_pitch_class
from core.chord_theory.session import (
    SessionPhase,
    SessionState,
    SessionSummary,
    advance,
    advance_session,
    new_session,
    reset,
    start,
    submit,
    summarize,
)
from core.chord_theory.types import (
    INVERSION_IDS,
    ChordInstance,
    ChordQuality,
    InversionSpec,
    LevelConfig,
    LevelConstraint,
    SessionScore,
    SubmissionResult,
)
from core.chord_theory.validator import (
    acceptable_answers,
    validate_answer,
    validate_notes,
    validate_text,
)

__all__ = [
    # Types
    "ChordQuality",
    "InversionSpec",
    "ChordInstance",
    "LevelConstraint",
    "LevelConfig",
    "SubmissionResult",
    "SessionScore",
    "INVERSION_IDS",
    # Errors
    "ChordTheoryError",
    "InvalidNoteName",
    "UnknownQuality",
    "UnsupportedInversion",
    "EmptyConstraintSet",
    "GenerationExhausted",
    "LevelNotFound",
    "InvalidTransition",
    # Pitch
    "pitch_class_of",
    "note_name",
    "is_black_key",
    "root_pitch_class",
    # Catalog
    "CATALOG",
    "lookup",
    "quality_for_symbol",
    # Inversions
    "apply_inversion",
    "inversion_spec",
    "bass_pitch_class",
    "fit_to_window",
    # Generator
    "generate",
    "build_instance",
    "instance_from_dict",
    # Validator
    "validate_notes",
    "validate_text",
    "validate_answer",
    "acceptable_answers",
    # Session
    "SessionPhase",
    "SessionState",
    "SessionSummary",
    "new_session",
    "start",
    "submit",
    "advance_session",
    "advance",
    "reset",
    "summarize",
    # Levels
    "load_level",
    "get_level",
    "available_levels",
    "available_categories",
]
