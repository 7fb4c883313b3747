from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional

from ..annotation import extract_keyspace_id


class StatementCategory(IntEnum):
    """Statement types found in the binlogs."""

    UNRECOGNIZED = 0
    BEGIN = 1
    COMMIT = 2
    ROLLBACK = 3
    DML = 4
    DDL = 5
    SET = 6


@dataclass(frozen=True)
class Statement:
    category: StatementCategory
    sql: bytes

    @property
    def is_dml(self) -> bool:
        return self.category == StatementCategory.DML

    def keyspace_id(self) -> bytes:
        # surrogateescape keeps binary literals intact; the annotation is ASCII.
        return extract_keyspace_id(self.sql.decode("utf-8", errors="surrogateescape"))


@dataclass(frozen=True)
class BinlogTransaction:
    """One transaction as read from the binlog.

    ``timestamp`` is set if the first statement was something like
    ``SET TIMESTAMP=...``.
    """

    statements: List[Statement] = field(default_factory=list)
    timestamp: int = 0
    gtid: Optional[str] = None

    def dml_statements(self) -> Iterator[Statement]:
        return (s for s in self.statements if s.is_dml)
