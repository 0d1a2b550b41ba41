"""Application layer: ports plus the caller, routing, transcript and settings policies."""
