"""HTTP API for client sessions."""
