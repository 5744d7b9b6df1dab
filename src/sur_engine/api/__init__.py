"""HTTP API for the Sur Engine."""
