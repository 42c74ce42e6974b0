"""I/O layer: registry connectors and the schema registry gateway."""
