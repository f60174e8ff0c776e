"""Bundled question datasets."""
