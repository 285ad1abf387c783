"""Output layer — report contracts and rendering for faults and responses."""
