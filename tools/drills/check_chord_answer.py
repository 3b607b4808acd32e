"""
check_chord_answer tool — validate a student's answer to an exercise.

Accepts either notes placed on the piano roll or a typed chord name.
Wrong answers are a successful tool call with is_correct=False; only
malformed input (no answer, unreadable exercise) fails the call.
"""

from typing import Any

from core.chord_theory.generator import instance_from_dict
from core.chord_theory.pitch import note_name
from core.chord_theory.validator import validate_notes, validate_text
from tools.base import DrillTool, ToolParameter, ToolResult


class CheckChordAnswer(DrillTool):
    """
    Check notes or a chord name against a generated exercise.

    Returns correctness plus the expected notes and canonical name so the
    host can show the solution after a wrong answer.
    """

    @property
    def name(self) -> str:
        return "check_chord_answer"

    @property
    def description(self) -> str:
        return (
            "Check a student's answer to a chord exercise. Give either 'notes' "
            "(MIDI numbers placed on the piano roll, any order) or 'text' (a chord "
            "name such as 'Dm7/F' or 'C first inversion'). Returns whether it is "
            "correct, the expected notes and the canonical chord name."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="exercise",
                type=dict,
                description="Exercise dict returned by generate_chord_exercise",
                required=True,
            ),
            ToolParameter(
                name="notes",
                type=(list, tuple),
                description="Submitted MIDI note numbers",
                required=False,
            ),
            ToolParameter(
                name="text",
                type=str,
                description="Submitted chord name",
                required=False,
            ),
            ToolParameter(
                name="require_inversion_label",
                type=bool,
                description="Inverted chords must name their inversion (default: true)",
                required=False,
                default=True,
            ),
        ]

    def execute(self, **kwargs) -> ToolResult:
        exercise: dict[str, Any] = kwargs["exercise"]
        notes = kwargs.get("notes")
        text: str | None = kwargs.get("text")
        require_label = kwargs.get("require_inversion_label")
        if require_label is None:
            require_label = True

        if (notes is None) == (text is None):
            return ToolResult(success=False, error="Provide exactly one of 'notes' or 'text'")

        instance = instance_from_dict(exercise)
        if notes is not None:
            submitted: Any = list(notes)
            is_correct = validate_notes(instance, submitted)
        else:
            submitted = text
            is_correct = validate_text(instance, text, require_inversion_label=require_label)

        return ToolResult(
            success=True,
            data={
                "is_correct": is_correct,
                "submitted": submitted,
                "expected_notes": list(instance.notes),
                "expected_note_names": [note_name(n) for n in instance.notes],
                "canonical_name": instance.canonical_name,
                "description": instance.description,
            },
            metadata={"answer_type": "notes" if notes is not None else "text"},
        )
