"""stc-calc command-line interface."""
