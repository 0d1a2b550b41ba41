"""Process identity provider."""
