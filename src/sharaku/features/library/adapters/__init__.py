"""Library adapters."""
