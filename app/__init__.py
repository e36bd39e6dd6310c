"""I/O layer: exchange and sentiment clients, services, CLI."""
