"""Output layer — human-readable rendering of ServiceResult for the CLI."""
