"""
core/chord_theory/errors.py — Error taxonomy for the chord drill engine.

All failures are local and synchronous. A wrong answer is never an error:
validators return False for it.

    ChordTheoryError
    ├── InvalidNoteName        malformed note-name string        (ValueError)
    ├── UnknownQuality         quality id not in the catalog     (KeyError)
    ├── UnsupportedInversion   inversion beyond a quality's set  (ValueError)
    ├── EmptyConstraintSet     level has no roots / qualities    (ValueError)
    ├── GenerationExhausted    duplicate-avoidance bound reached (soft)
    ├── LevelNotFound          unknown level category / id       (ValueError)
    └── InvalidTransition      illegal session state transition  (RuntimeError)
"""

from __future__ import annotations


class ChordTheoryError(Exception):
    """Base class for every error raised by core/chord_theory."""


class InvalidNoteName(ChordTheoryError, ValueError):
    """Raised when a note-name string cannot be parsed.

    Args:
        name: The offending input string.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid note name {name!r}")


class UnknownQuality(ChordTheoryError, KeyError):
    """Raised when a chord quality id is not in the catalog."""

    def __init__(self, quality_id: str, valid: list[str] | None = None) -> None:
        self.quality_id = quality_id
        message = f"Unknown chord quality {quality_id!r}"
        if valid:
            message += f". Valid: {valid}"
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message


class UnsupportedInversion(ChordTheoryError, ValueError):
    """Raised when an inversion is requested that a quality does not support."""

    def __init__(self, quality_id: str, inversion_id: str, max_inversion: int) -> None:
        self.quality_id = quality_id
        self.inversion_id = inversion_id
        self.max_inversion = max_inversion
        super().__init__(
            f"Quality {quality_id!r} does not support inversion {inversion_id!r} "
            f"(max inversion index {max_inversion})"
        )


class EmptyConstraintSet(ChordTheoryError, ValueError):
    """Raised when a level constraint offers nothing to pick from."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Level constraint {field_name!r} must not be empty")


class GenerationExhausted(ChordTheoryError):
    """Raised in strict mode when duplicate avoidance hits its attempt bound.

    Non-strict generation logs a warning and accepts the last candidate
    instead; this error exists for callers that prefer to fail loudly.
    """

    def __init__(self, attempts: int, identity: tuple[int, str, str]) -> None:
        self.attempts = attempts
        self.identity = identity
        super().__init__(
            f"Could not avoid repeating {identity} after {attempts} attempts"
        )


class LevelNotFound(ChordTheoryError, ValueError):
    """Raised when a level category or level id is unknown."""


class InvalidTransition(ChordTheoryError, RuntimeError):
    """Raised when a session transition is requested from the wrong phase."""

    def __init__(self, action: str, phase: str) -> None:
        self.action = action
        self.phase = phase
        super().__init__(f"Cannot {action} while session is {phase!r}")
