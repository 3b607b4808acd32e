"""
Configuration dataclasses for the chord drill engine.

These immutable config objects decouple tuning parameters from function
signatures, so a host can define one engine configuration and pass it to
every generate() call of a session.
"""

from dataclasses import dataclass

# Narrowest window that still fits every catalog chord in every drilled
# inversion (a 13th chord spans 21 semitones, inversions reach 24+).
MIN_WINDOW_SPAN: int = 36


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for chord generation.

    Immutable configuration object that can be reused across many
    generate() calls. Defines the pitch window exercises are voiced in and
    the randomization knobs of the generator.

    Attributes:
        pitch_low: Lowest MIDI note an exercise may contain. Defaults to 24
            (C1), the bottom of the piano-roll display.
        pitch_high: Highest MIDI note an exercise may contain. Defaults to 84
            (C6), the top of the piano-roll display.
        max_attempts: Upper bound on duplicate-avoidance retries. Defaults
            to 20; the last candidate is accepted after that.
        required_inversion_weight: Probability that a level with a required
            inversion draws that inversion rather than root position.
            Defaults to 0.5. A level's own weight takes precedence.

    Example:
        >>> config = EngineConfig(pitch_low=48, pitch_high=96)
        >>> chord = generate(constraint, config=config, seed=7)
    """

    pitch_low: int = 24
    pitch_high: int = 84
    max_attempts: int = 20
    required_inversion_weight: float = 0.5

    @property
    def window_span(self) -> int:
        """Width of the pitch window in semitones."""
        return self.pitch_high - self.pitch_low

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not (0 <= self.pitch_low <= 127) or not (0 <= self.pitch_high <= 127):
            raise ValueError(
                f"pitch window must lie in [0, 127], got [{self.pitch_low}, {self.pitch_high}]"
            )
        if self.window_span < MIN_WINDOW_SPAN:
            raise ValueError(
                f"pitch window ({self.pitch_low}-{self.pitch_high}) must span at least "
                f"{MIN_WINDOW_SPAN} semitones"
            )
        if self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if not (0.0 <= self.required_inversion_weight <= 1.0):
            raise ValueError(
                f"required_inversion_weight must be in [0, 1], "
                f"got {self.required_inversion_weight}"
            )


# Pre-defined configurations for common use cases

DEFAULT_CONFIG = EngineConfig()
"""Default configuration: window C1–C6, 20 attempts, 50/50 required inversion."""

WIDE_WINDOW_CONFIG = EngineConfig(pitch_low=24, pitch_high=96)
"""Wider window (C1–C7) for full-size piano-roll displays."""

STRICT_WINDOW_CONFIG = EngineConfig(pitch_low=48, pitch_high=84)
"""Narrow window (C3–C6) for compact mobile displays."""
