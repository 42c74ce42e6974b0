"""
Infrastructure Layer

Reusable services that support schema management without performing network I/O.

Components:
- schema: Table metadata model, Avro schema trees and schema derivation
- settings: Table definition file loading and validation
"""
