"""Folio: search and analytics backend for a portfolio and blog site."""

__version__ = "1.0.0"
