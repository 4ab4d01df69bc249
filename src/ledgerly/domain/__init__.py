"""Domain layer: entities and services for Ledgerly."""
