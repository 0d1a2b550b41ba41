"""Standard stream transcript backend."""
