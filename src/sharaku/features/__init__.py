"""Feature slices: catalog, library, metadata and path."""
