"""chordpad: the editing core of a terminal text editor."""

__version__ = "0.1.0"
