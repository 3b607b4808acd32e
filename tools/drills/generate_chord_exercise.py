"""
generate_chord_exercise tool — draw the next exercise chord for a level.

Pure computation: no DB, no I/O beyond the cached level files.
Given a level category + level number (+ optional seed and previous
exercise), returns:
  - The exercise chord (root, quality, inversion, notes, names)
  - The level's answer mode and pass requirements
  - A prompt the host can show as-is
"""

import random
from typing import Any

from core.chord_theory.generator import generate, instance_from_dict
from core.chord_theory.levels import available_categories, load_level
from core.chord_theory.pitch import note_name
from tools.base import DrillTool, ToolParameter, ToolResult


class GenerateChordExercise(DrillTool):
    """
    Generate one chord exercise under a drill level's constraints.

    Passing the previous exercise guarantees the new one is a different
    (root, quality, inversion) combination. Passing a seed makes the draw
    repeatable.
    """

    @property
    def name(self) -> str:
        return "generate_chord_exercise"

    @property
    def description(self) -> str:
        return (
            "Generate a chord exercise for a drill level: root, quality, inversion "
            "and the voiced MIDI notes, plus the level's answer mode and pass "
            "requirements. Pass the previous exercise to avoid an immediate repeat."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="category",
                type=str,
                description="Level category: basic_triads, seventh_chords, extended_chords",
                required=True,
                choices=tuple(available_categories()),
            ),
            ToolParameter(
                name="level",
                type=int,
                description="Level number within the category (1-based)",
                required=True,
            ),
            ToolParameter(
                name="seed",
                type=int,
                description="Random seed for a repeatable exercise",
                required=False,
            ),
            ToolParameter(
                name="previous",
                type=dict,
                description="The previous exercise dict, to avoid repeating it",
                required=False,
            ),
        ]

    def execute(self, **kwargs) -> ToolResult:
        category: str = kwargs["category"]
        level_number: int = kwargs["level"]
        seed: int | None = kwargs.get("seed")
        previous_data: dict[str, Any] | None = kwargs.get("previous")

        level = load_level(category, level_number)
        previous = instance_from_dict(previous_data) if previous_data else None
        instance = generate(level.constraint, previous, rng=random.Random(seed))

        exercise = instance.to_dict()
        exercise["note_names"] = [note_name(n) for n in instance.notes]
        exercise["level_id"] = level.level_id
        exercise["answer_mode"] = level.answer_mode
        exercise["prompt"] = (
            f"Build {instance.description}"
            if level.answer_mode == "notes"
            else "Name this chord"
        )

        return ToolResult(
            success=True,
            data={
                "exercise": exercise,
                "level": {
                    "level_id": level.level_id,
                    "title": level.title,
                    "total_problems": level.total_problems,
                    "pass_accuracy": level.pass_accuracy,
                    "pass_time": level.pass_time,
                    "require_inversion_label": level.require_inversion_label,
                },
            },
            metadata={"seed": seed, "category": category},
        )
