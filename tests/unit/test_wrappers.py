from __future__ import annotations

from typing import Any

from sqlannotation.annotation import UNFRIENDLY_ANNOTATION, Annotator
from sqlannotation.config.settings import Settings
from sqlannotation.dbapi.wrappers import AnnotatingConnection
from sqlannotation.stats import Counter


class _SilentLogger:
    def warning(self, msg: str, *args: object) -> bool:
        return True


class _Cur:
    def __init__(self) -> None:
        self.executed: list[tuple[str, Any]] = []
        self.rowcount = 0
        self.closed = False

    def execute(self, operation: str, params=None):
        self.executed.append((operation, params))
        self.rowcount = 1
        return 1

    def executemany(self, operation: str, seq_of_params):
        n = 0
        for p in seq_of_params:
            self.executed.append((operation, p))
            n += 1
        self.rowcount = n
        return n

    def fetchone(self):
        return (1,)

    def close(self):
        self.closed = True


class _Conn:
    server_status = 2

    def __init__(self) -> None:
        self.cur = _Cur()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, *a, **k):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True

    def get_server_info(self):
        return "8.0.0"


def _wrap(settings: Settings) -> tuple[AnnotatingConnection, _Conn, Counter]:
    raw = _Conn()
    counter = Counter("test-wrappers")
    annotator = Annotator(counter=counter, logger=_SilentLogger())
    conn = AnnotatingConnection(conn=raw, annotator=annotator, settings=settings, driver_name="pymysql", database="test")
    return conn, raw, counter


def test_execute_annotates_with_keyspace_id() -> None:
    conn, raw, _ = _wrap(Settings())
    cur = conn.cursor()
    cur.execute("INSERT INTO t (a) VALUES (%s)", (1,), keyspace_ids=[b"\x01\x02"])
    assert raw.cur.executed == [("INSERT INTO t (a) VALUES (%s) /* vtgate:: keyspace_id:0102 */", (1,))]


def test_executemany_annotates_once() -> None:
    conn, raw, _ = _wrap(Settings())
    cur = conn.cursor()
    assert cur.executemany("INSERT INTO t (a) VALUES (%s)", [(1,), (2,)], keyspace_ids=[b"\xff"]) == 2
    assert [sql for sql, _ in raw.cur.executed] == ["INSERT INTO t (a) VALUES (%s) /* vtgate:: keyspace_id:ff */"] * 2


def test_multiple_keyspace_ids_mark_unfriendly() -> None:
    conn, raw, counter = _wrap(Settings())
    conn.cursor().execute("DELETE FROM t", keyspace_ids=[b"\x01", b"\x02"])
    assert raw.cur.executed[0][0] == "DELETE FROM t " + UNFRIENDLY_ANNOTATION
    assert counter.get() == 1


def test_no_keyspace_ids_passes_through_by_default() -> None:
    conn, raw, counter = _wrap(Settings())
    conn.cursor().execute("UPDATE t SET a=1")
    assert raw.cur.executed[0][0] == "UPDATE t SET a=1"
    assert counter.get() == 0


def test_no_keyspace_ids_marked_unfriendly_when_unrouted_enabled() -> None:
    conn, raw, counter = _wrap(Settings(annotate_unrouted=True))
    cur = conn.cursor()
    cur.execute("UPDATE t SET a=1")
    cur.execute("SELECT 1")
    assert raw.cur.executed[0][0] == "UPDATE t SET a=1 " + UNFRIENDLY_ANNOTATION
    assert raw.cur.executed[1][0] == "SELECT 1"
    assert counter.get() == 1


def test_disabled_annotation_passes_through() -> None:
    conn, raw, counter = _wrap(Settings(annotate_enabled=False, annotate_unrouted=True))
    conn.cursor().execute("UPDATE t SET a=1", keyspace_ids=[])
    assert raw.cur.executed[0][0] == "UPDATE t SET a=1"
    assert counter.get() == 0


def test_proxies_driver_attributes_and_lifecycle() -> None:
    conn, raw, _ = _wrap(Settings())
    cur = conn.cursor()
    cur.execute("SELECT 1")
    assert cur.fetchone() == (1,)
    assert cur.rowcount == 1
    assert conn.get_server_info() == "8.0.0"
    assert conn.database == "test"
    cur.close()
    conn.commit()
    conn.rollback()
    conn.close()
    assert raw.cur.closed and raw.committed and raw.rolled_back and raw.closed
