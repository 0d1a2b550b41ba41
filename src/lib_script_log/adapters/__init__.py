"""Adapters implementing the application ports against the operating system."""
