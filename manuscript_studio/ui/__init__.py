"""Qt widgets for the desktop editor."""
