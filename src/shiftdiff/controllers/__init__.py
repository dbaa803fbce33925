"""Controllers: orchestration of the pure vision helpers."""
