"""Qt widgets for the editor window."""
