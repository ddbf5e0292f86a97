"""Folio - content engine for a personal portfolio blog."""

__version__ = "0.1.0"
