"""Live call-chain provider."""
