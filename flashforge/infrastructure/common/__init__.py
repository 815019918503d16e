"""Shared infrastructure: dependency wiring and response wrappers."""
