from __future__ import annotations

from sqlannotation.binlog.models import BinlogTransaction, Statement, StatementCategory
from sqlannotation.errors import ReplicationUnfriendlyError


def main() -> None:
    txn = BinlogTransaction(
        statements=[
            Statement(StatementCategory.BEGIN, b"BEGIN"),
            Statement(StatementCategory.DML, b"INSERT INTO t VALUES (1) /* vtgate:: keyspace_id:0001 */"),
            Statement(StatementCategory.DML, b"DELETE FROM t /* vtgate:: filtered_replication_unfriendly */"),
            Statement(StatementCategory.COMMIT, b"COMMIT"),
        ]
    )
    for stmt in txn.dml_statements():
        try:
            print(stmt.keyspace_id().hex(), stmt.sql.decode())
        except ReplicationUnfriendlyError:
            print("UNFRIENDLY", stmt.sql.decode())


if __name__ == "__main__":
    main()
