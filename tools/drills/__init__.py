"""Chord drill tools: exercise generation, answer checking, chord lookup."""
