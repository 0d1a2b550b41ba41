"""File retention policy."""
