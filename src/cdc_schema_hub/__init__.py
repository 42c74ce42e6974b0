"""
CDC Schema Hub - Avro schema derivation and registry management.

Derives key/value/data record schemas from table metadata for change-data-capture
events and keeps them registered against a Confluent-compatible schema registry.
"""

__version__ = "0.1.0"
