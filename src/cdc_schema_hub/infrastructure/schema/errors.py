"""
Schema derivation exceptions.
"""


class SchemaStructureError(ValueError):
    """Raised when table metadata or a schema tree is structurally invalid."""

    pass
