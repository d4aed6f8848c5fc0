"""Library synchronization use cases."""
