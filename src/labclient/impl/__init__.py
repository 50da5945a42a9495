"""HTTP-backed client implementation and the shared parameter codec."""
