"""HTTP API layer for Ledgerly."""
