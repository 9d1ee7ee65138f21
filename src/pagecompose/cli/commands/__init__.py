"""Top-level pagecompose commands."""
