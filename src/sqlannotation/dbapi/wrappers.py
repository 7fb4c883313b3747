from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from ..annotation import Annotator, KeyspaceId
from ..config.settings import Settings


@runtime_checkable
class DBAPICursor(Protocol):
    def execute(self, operation: str, params: Any = ...) -> Any: ...
    def executemany(self, operation: str, seq_of_params: Any) -> Any: ...
    def close(self) -> Any: ...


@runtime_checkable
class DBAPIConnection(Protocol):
    def cursor(self, *args: Any, **kwargs: Any) -> DBAPICursor: ...
    def commit(self) -> Any: ...
    def rollback(self) -> Any: ...
    def close(self) -> Any: ...


TConn = TypeVar("TConn", bound=DBAPIConnection)


class AnnotatingCursor:
    def __init__(self, *, cursor: DBAPICursor, parent: "AnnotatingConnection") -> None:
        self._cursor = cursor
        self._parent = parent

    def __getattr__(self, name: str) -> Any:
        return getattr(self._cursor, name)

    def execute(self, operation: str, params: Any = None, *, keyspace_ids: Optional[Sequence[KeyspaceId]] = None) -> Any:
        operation = self._parent._annotate(operation, keyspace_ids)
        return self._cursor.execute(operation, params)

    def executemany(
        self, operation: str, seq_of_params: Any, *, keyspace_ids: Optional[Sequence[KeyspaceId]] = None
    ) -> Any:
        operation = self._parent._annotate(operation, keyspace_ids)
        return self._cursor.executemany(operation, seq_of_params)

    def close(self) -> Any:
        return self._cursor.close()


class AnnotatingConnection:
    """DBAPI connection proxy whose cursors annotate DML with keyspace ids.

    Statements executed without ``keyspace_ids`` are passed through untouched
    unless ``settings.annotate_unrouted`` is set, in which case they are
    treated as targeting no keyspace id.
    """

    def __init__(
        self,
        *,
        conn: TConn,
        annotator: Annotator,
        settings: Settings,
        driver_name: str,
        database: Optional[str],
    ) -> None:
        self._conn = conn
        self._annotator = annotator
        self._settings = settings
        self.driver_name = driver_name
        self.database = database

    def __getattr__(self, name: str) -> Any:
        return getattr(self._conn, name)

    def cursor(self, *args: Any, **kwargs: Any) -> AnnotatingCursor:
        return AnnotatingCursor(cursor=self._conn.cursor(*args, **kwargs), parent=self)

    def commit(self) -> Any:
        return self._conn.commit()

    def rollback(self) -> Any:
        return self._conn.rollback()

    def close(self) -> Any:
        return self._conn.close()

    def _annotate(self, sql: str, keyspace_ids: Optional[Sequence[KeyspaceId]]) -> str:
        if not self._settings.annotate_enabled:
            return sql
        if keyspace_ids is None:
            if not self._settings.annotate_unrouted:
                return sql
            keyspace_ids = ()
        return self._annotator.annotate_if_dml(sql, keyspace_ids)
