"""Session path derivation."""
