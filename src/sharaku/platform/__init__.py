"""Infrastructure shared by every feature: logging, database, filesystem helpers."""
