"""Shared helpers for Fiddler tests."""
