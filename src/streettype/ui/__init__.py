"""User interface layers (command line)."""
