"""Text conversion and paragraph helpers."""
