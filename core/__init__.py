"""Core chord drill engine: pure theory, generation, validation, sessions."""
