"""Code generation engine of the studio application builder."""

__version__ = "0.1.0"
