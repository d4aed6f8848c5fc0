"""Catalog ports."""
