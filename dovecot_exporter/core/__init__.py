"""Core infrastructure: configuration, logging and protocols."""
