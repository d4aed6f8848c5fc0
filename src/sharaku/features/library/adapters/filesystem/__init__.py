"""Filesystem gateway implementations."""
