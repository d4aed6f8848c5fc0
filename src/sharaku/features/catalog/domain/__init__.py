"""Catalog domain models and errors."""
