"""
Schema registry gateway exceptions.
"""

from typing import Optional


class SchemaRegistryError(Exception):
    """Raised when a registry call made on behalf of a subject fails.

    The underlying client error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        subject: str,
        schema_id: Optional[int] = None,
        schema: Optional[str] = None,
    ):
        super().__init__(message)
        self.subject = subject
        self.schema_id = schema_id
        self.schema = schema


class UnresolvedSubjectError(SchemaRegistryError):
    """Raised when a subject has no cached id and no version in the registry.

    Usually a reader asked for a schema before any writer registered it.
    """

    pass
