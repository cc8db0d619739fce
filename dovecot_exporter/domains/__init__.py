"""Domain logic of the exporter."""
