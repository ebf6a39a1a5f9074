"""Domain layer: sync, identity, theme and navigation state for the client."""
