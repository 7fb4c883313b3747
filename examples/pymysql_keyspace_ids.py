from __future__ import annotations

from sqlannotation import connect


def main() -> None:
    conn = connect(host="127.0.0.1", user="root", password="secret", database="test", port=3306)
    cur = conn.cursor()
    # One keyspace id: routed by filtered replication.
    cur.execute("INSERT INTO t (id, name) VALUES (%s, %s)", (1, "a"), keyspace_ids=[b"\x00\x01"])
    # Several keyspace ids: annotated as filtered-replication-unfriendly.
    cur.execute("UPDATE t SET name=%s", ("b",), keyspace_ids=[b"\x00\x01", b"\x80\x00"])
    conn.commit()
    cur.close()
    conn.close()


if __name__ == "__main__":
    main()
