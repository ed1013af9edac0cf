"""Fakes for the OAuth domain."""
