"""Service layer — presence resolution, message validation, and arrangements."""
