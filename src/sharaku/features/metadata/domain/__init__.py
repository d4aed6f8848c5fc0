"""Folder-name metadata parsing."""
