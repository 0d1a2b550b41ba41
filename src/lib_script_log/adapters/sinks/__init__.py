"""File, CSV, network CSV and console sinks."""
