"""Library synchronization domain types."""
