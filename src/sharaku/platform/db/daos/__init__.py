"""Data access objects."""
