"""
describe_chord tool — spell out a chord in any supported inversion.

Pure computation: no randomness, no I/O.
Given a root + quality (+ optional inversion and octave), returns:
  - Voiced MIDI notes and their names
  - Canonical name and description
  - Bass note
  - Every text answer accepted for the chord
"""

from core.chord_theory.catalog import all_quality_ids
from core.chord_theory.generator import build_instance
from core.chord_theory.inversions import available_inversions
from core.chord_theory.pitch import note_name
from core.chord_theory.types import INVERSION_IDS
from core.chord_theory.validator import acceptable_answers
from tools.base import DrillTool, ToolParameter, ToolResult

_DEFAULT_OCTAVE: int = 4  # C4 = MIDI 60


class DescribeChord(DrillTool):
    """
    Describe a chord: notes, names, bass and accepted answers.

    Useful for a host's "show solution" view and for building custom
    exercises outside the predefined levels.
    """

    @property
    def name(self) -> str:
        return "describe_chord"

    @property
    def description(self) -> str:
        return (
            "Spell a chord from a root, quality and optional inversion: the voiced "
            "MIDI notes, note names, canonical name (e.g. 'Cmaj7/E'), bass note and "
            "every chord-name answer the validator accepts for it."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="root",
                type=str,
                description="Root note, e.g. 'C', 'F#', 'Bb'",
                required=True,
            ),
            ToolParameter(
                name="quality",
                type=str,
                description=f"Chord quality id: {', '.join(all_quality_ids())}",
                required=True,
            ),
            ToolParameter(
                name="inversion",
                type=str,
                description="Inversion: root, first, second, third, fourth (default: root)",
                required=False,
                default="root",
                choices=INVERSION_IDS,
            ),
            ToolParameter(
                name="octave",
                type=int,
                description="Octave of the C the root is built from (default: 4, C4 = 60)",
                required=False,
                default=_DEFAULT_OCTAVE,
            ),
        ]

    def execute(self, **kwargs) -> ToolResult:
        root: str = kwargs["root"]
        quality_id: str = kwargs["quality"]
        inversion_id: str = kwargs.get("inversion") or "root"
        octave: int = kwargs.get("octave")
        if octave is None:
            octave = _DEFAULT_OCTAVE

        instance = build_instance(root, quality_id, inversion_id, (octave + 1) * 12)

        data = instance.to_dict()
        data.update(
            {
                "note_names": [note_name(n) for n in instance.notes],
                "bass_note": note_name(instance.bass_note),
                "intervals": list(instance.quality.intervals),
                "family": instance.quality.family,
                "available_inversions": [
                    spec.id for spec in available_inversions(instance.quality)
                ],
                "accepted_answers": sorted(acceptable_answers(instance)),
            }
        )
        return ToolResult(success=True, data=data)
