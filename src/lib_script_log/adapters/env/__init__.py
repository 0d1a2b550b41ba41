"""Environment variable settings layer."""
