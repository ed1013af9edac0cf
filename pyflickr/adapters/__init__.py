"""Bundled implementations of the core protocols."""
