"""
core/chord_theory/session.py — Drill session state machine.

A session walks a LevelConfig's problems one at a time:

    NOT_STARTED ──start──→ AWAITING_ANSWER ──submit──→ FEEDBACK
                                 ↑                        │
                                 └────────advance─────────┤
                                                          └─(last problem)─→ COMPLETED

    reset() returns to NOT_STARTED from any phase.

SessionState is immutable: every transition returns a new state, so a host
can keep history, compare states in tests, or discard a state to undo.
Illegal transitions raise InvalidTransition.

Verdict: a COMPLETED session passes when
    accuracy >= level.pass_accuracy  and  average time <= level.pass_time

Elapsed time and timestamps are supplied by the caller; nothing here reads
a clock.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from core.chord_theory.errors import InvalidTransition
from core.chord_theory.generator import generate
from core.chord_theory.types import (
    EMPTY_SCORE,
    ChordInstance,
    LevelConfig,
    SessionScore,
    SubmissionResult,
)
from core.chord_theory.validator import validate_answer
from core.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Session state machine phases."""

    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
    FEEDBACK = "feedback"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# State and summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionState:
    """Complete state of one drill session.

    Attributes:
        level:       The level being drilled
        phase:       Current SessionPhase
        current:     The exercise on screen (None before start)
        score:       Running counters
        times:       Elapsed seconds per answered problem, in order
        last_result: Outcome of the latest submission, shown during FEEDBACK
        passed:      Verdict, set only once COMPLETED
        started_at:  Host timestamp of start()
        ended_at:    Host timestamp of completion
        config:      Engine config used for every generated problem
    """

    level: LevelConfig
    phase: SessionPhase = SessionPhase.NOT_STARTED
    current: ChordInstance | None = None
    score: SessionScore = EMPTY_SCORE
    times: tuple[float, ...] = ()
    last_result: SubmissionResult | None = None
    passed: bool | None = None
    started_at: float | None = None
    ended_at: float | None = None
    config: EngineConfig = DEFAULT_CONFIG

    @property
    def in_progress(self) -> bool:
        return self.phase in (SessionPhase.AWAITING_ANSWER, SessionPhase.FEEDBACK)

    @property
    def total_time(self) -> float:
        return sum(self.times)

    @property
    def average_time(self) -> float:
        """Mean seconds per answered problem, 0.0 before the first answer."""
        if not self.times:
            return 0.0
        return self.total_time / len(self.times)

    @property
    def problem_number(self) -> int:
        """1-based number of the problem on screen."""
        if self.phase is SessionPhase.AWAITING_ANSWER:
            return self.score.total + 1
        return self.score.total

    @property
    def remaining(self) -> int:
        return max(self.level.total_problems - self.score.total, 0)


@dataclass(frozen=True)
class SessionSummary:
    """Plain record handed to the host's statistics store."""

    level_id: str
    accuracy: float
    avg_time: float
    total_time: float
    problems_solved: int
    correct_answers: int
    best_streak: int
    passed: bool
    start_time: float | None = None
    end_time: float | None = None

    def to_record(self) -> dict[str, Any]:
        """camelCase dict in the shape the statistics endpoint stores."""
        return {
            "levelId": self.level_id,
            "accuracy": self.accuracy,
            "avgTime": self.avg_time,
            "totalTime": self.total_time,
            "problemsSolved": self.problems_solved,
            "correctAnswers": self.correct_answers,
            "bestStreak": self.best_streak,
            "passed": self.passed,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _require(state: SessionState, action: str, *phases: SessionPhase) -> None:
    if state.phase not in phases:
        raise InvalidTransition(action, state.phase.value)


def new_session(level: LevelConfig, *, config: EngineConfig = DEFAULT_CONFIG) -> SessionState:
    """Return a NOT_STARTED session for a level."""
    return SessionState(level=level, config=config)


def start(
    state: SessionState,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    started_at: float | None = None,
) -> SessionState:
    """Generate the first problem and wait for an answer.

    Raises:
        InvalidTransition: If the session was already started
    """
    _require(state, "start", SessionPhase.NOT_STARTED)
    if rng is None:
        rng = random.Random(seed)
    first = generate(state.level.constraint, rng=rng, config=state.config)
    logger.info(
        "Session started: level=%s problems=%d",
        state.level.level_id,
        state.level.total_problems,
    )
    return replace(
        state,
        phase=SessionPhase.AWAITING_ANSWER,
        current=first,
        started_at=started_at,
    )


def advance_session(
    state: SessionState, elapsed_time: float, submission_correct: bool
) -> SessionState:
    """Record one answered problem: update the score and show feedback.

    Pure reducer behind submit(); useful when the host validated the
    answer itself.

    Raises:
        InvalidTransition: If no problem is awaiting an answer
        ValueError:        If elapsed_time is negative
    """
    _require(state, "record an answer", SessionPhase.AWAITING_ANSWER)
    if elapsed_time < 0:
        raise ValueError(f"elapsed_time must be >= 0, got {elapsed_time}")
    return replace(
        state,
        phase=SessionPhase.FEEDBACK,
        score=state.score.record(submission_correct),
        times=(*state.times, float(elapsed_time)),
    )


def submit(
    state: SessionState, answer: Any, elapsed_time: float
) -> tuple[SessionState, SubmissionResult]:
    """Validate an answer to the current problem.

    Args:
        state:        Session awaiting an answer
        answer:       Chord name (str) or MIDI notes (iterable of int)
        elapsed_time: Seconds the student took

    Returns:
        (new state in FEEDBACK, SubmissionResult)

    Raises:
        InvalidTransition: If no problem is awaiting an answer
    """
    _require(state, "submit", SessionPhase.AWAITING_ANSWER)
    instance = state.current
    if instance is None:
        raise InvalidTransition("submit", state.phase.value)
    is_text = isinstance(answer, str)
    if not is_text and isinstance(answer, Iterable):
        # Read once: generators and iterators are consumed by validation
        answer = tuple(answer)
    is_correct = validate_answer(
        instance, answer, require_inversion_label=state.level.require_inversion_label
    )
    result = SubmissionResult(
        is_correct=is_correct,
        expected_notes=instance.notes,
        submitted_notes=() if is_text else answer,
        elapsed_time=float(elapsed_time),
        expected_name=instance.canonical_name,
        submitted_text=answer if is_text else None,
    )
    next_state = advance_session(state, elapsed_time, is_correct)
    return replace(next_state, last_result=result), result


def _verdict(state: SessionState) -> bool:
    level = state.level
    return state.score.accuracy >= level.pass_accuracy and state.average_time <= level.pass_time


def advance(
    state: SessionState,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    ended_at: float | None = None,
) -> SessionState:
    """Leave feedback: move to the next problem, or complete the session.

    The finished problem is passed to the generator so the next one differs.

    Raises:
        InvalidTransition: If the session is not showing feedback
    """
    _require(state, "advance", SessionPhase.FEEDBACK)
    if state.score.total < state.level.total_problems:
        if rng is None:
            rng = random.Random(seed)
        following = generate(
            state.level.constraint, state.current, rng=rng, config=state.config
        )
        return replace(
            state,
            phase=SessionPhase.AWAITING_ANSWER,
            current=following,
            last_result=None,
        )

    passed = _verdict(state)
    logger.info(
        "Session completed: level=%s accuracy=%.1f%% avg_time=%.2fs passed=%s",
        state.level.level_id,
        state.score.accuracy,
        state.average_time,
        passed,
    )
    return replace(state, phase=SessionPhase.COMPLETED, passed=passed, ended_at=ended_at)


def reset(state: SessionState) -> SessionState:
    """Discard all progress and return to NOT_STARTED."""
    return new_session(state.level, config=state.config)


def summarize(state: SessionState) -> SessionSummary:
    """Build the statistics record for a session (any phase)."""
    return SessionSummary(
        level_id=state.level.level_id,
        accuracy=state.score.accuracy,
        avg_time=state.average_time,
        total_time=state.total_time,
        problems_solved=state.score.total,
        correct_answers=state.score.correct,
        best_streak=state.score.best_streak,
        passed=state.passed is True,
        start_time=state.started_at,
        end_time=state.ended_at,
    )
