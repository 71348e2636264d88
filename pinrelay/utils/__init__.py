"""Utility helpers: filename sanitizing."""
