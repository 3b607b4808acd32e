"""Host-facing drill tools wrapping core/chord_theory."""
