"""
Tests for core.config module.

These tests verify EngineConfig validation and predefined configurations.
"""

import pytest

from core.config import (
    DEFAULT_CONFIG,
    MIN_WINDOW_SPAN,
    STRICT_WINDOW_CONFIG,
    WIDE_WINDOW_CONFIG,
    EngineConfig,
)


class TestEngineConfigValidation:
    """Test EngineConfig parameter validation."""

    def test_default_values(self) -> None:
        config = EngineConfig()
        assert config.pitch_low == 24
        assert config.pitch_high == 84
        assert config.max_attempts == 20
        assert config.required_inversion_weight == 0.5

    def test_custom_values(self) -> None:
        config = EngineConfig(pitch_low=24, pitch_high=72, max_attempts=5)
        assert config.window_span == 48
        assert config.max_attempts == 5

    def test_window_narrower_than_minimum_raises(self) -> None:
        with pytest.raises(ValueError, match="must span at least"):
            EngineConfig(pitch_low=48, pitch_high=72)

    def test_minimum_window_is_valid(self) -> None:
        config = EngineConfig(pitch_low=48, pitch_high=48 + MIN_WINDOW_SPAN)
        assert config.window_span == MIN_WINDOW_SPAN

    def test_inverted_window_raises(self) -> None:
        with pytest.raises(ValueError, match="must span at least"):
            EngineConfig(pitch_low=84, pitch_high=36)

    def test_window_outside_midi_raises(self) -> None:
        with pytest.raises(ValueError, match=r"must lie in \[0, 127\]"):
            EngineConfig(pitch_low=100, pitch_high=140)

    def test_zero_attempts_raises(self) -> None:
        with pytest.raises(ValueError, match="max_attempts must be positive"):
            EngineConfig(max_attempts=0)

    def test_weight_above_one_raises(self) -> None:
        with pytest.raises(ValueError, match="required_inversion_weight"):
            EngineConfig(required_inversion_weight=1.5)

    def test_weight_bounds_are_valid(self) -> None:
        assert EngineConfig(required_inversion_weight=0.0).required_inversion_weight == 0.0
        assert EngineConfig(required_inversion_weight=1.0).required_inversion_weight == 1.0


class TestEngineConfigImmutability:
    """Test that EngineConfig is frozen."""

    def test_cannot_modify_window(self) -> None:
        config = EngineConfig()
        with pytest.raises(AttributeError):
            config.pitch_low = 0  # type: ignore[misc]

    def test_is_hashable(self) -> None:
        config_set = {EngineConfig(), EngineConfig()}
        assert len(config_set) == 1


class TestPredefinedConfigs:
    """Test predefined configuration constants."""

    def test_default_config(self) -> None:
        assert (DEFAULT_CONFIG.pitch_low, DEFAULT_CONFIG.pitch_high) == (24, 84)

    def test_wide_window_config(self) -> None:
        assert (WIDE_WINDOW_CONFIG.pitch_low, WIDE_WINDOW_CONFIG.pitch_high) == (24, 96)

    def test_strict_window_config(self) -> None:
        assert (STRICT_WINDOW_CONFIG.pitch_low, STRICT_WINDOW_CONFIG.pitch_high) == (48, 84)
        assert STRICT_WINDOW_CONFIG.window_span == MIN_WINDOW_SPAN
