"""Prometheus exporter for Dovecot's stats socket."""

__version__ = "0.1.0"
