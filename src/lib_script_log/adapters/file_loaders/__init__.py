"""Settings file parsers."""
