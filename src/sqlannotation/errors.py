from __future__ import annotations

from typing import Optional


class SqlAnnotationError(Exception):
    """Base error."""


class DriverAdapterError(SqlAnnotationError):
    """Raised when a DB driver cannot be used."""


class ExtractKeyspaceIdError(SqlAnnotationError):
    """Raised when a keyspace id cannot be recovered from a statement."""

    prefix = ""

    def __init__(self, message: str, *, sql: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.sql = sql

    def __str__(self) -> str:
        return f"{self.prefix} {self.message}"


class ParseError(ExtractKeyspaceIdError):
    """Annotation is missing, malformed or conflicting."""

    prefix = "Parse-Error."


class ReplicationUnfriendlyError(ExtractKeyspaceIdError):
    """Statement is annotated as not routable to a single keyspace id."""

    prefix = "Statement is filtered-replication-unfriendly."
