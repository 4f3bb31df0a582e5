"""Résumé parsing, qualification matching and bounded keyword tailoring."""

__version__ = "0.1.0"
