"""Catalog store adapters."""
