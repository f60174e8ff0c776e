"""Familiada test suite."""
