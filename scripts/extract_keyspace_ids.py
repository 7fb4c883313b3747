#!/usr/bin/env python3
"""
Print the keyspace id annotated on each SQL statement.

Reads one statement per line from the given files (or stdin) and prints one
line per statement:
- the keyspace id as lowercase hex
- UNFRIENDLY for filtered-replication-unfriendly statements
- ERROR <message> when the annotation cannot be parsed

Usage:
  python scripts/extract_keyspace_ids.py statements.sql
  mysqlbinlog ... | python scripts/extract_keyspace_ids.py --dml-only
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Iterator, List, TextIO

from sqlannotation import extract_keyspace_id, is_dml
from sqlannotation.errors import ParseError, ReplicationUnfriendlyError


def iter_statements(streams: Iterable[TextIO], *, dml_only: bool) -> Iterator[str]:
    for stream in streams:
        for line in stream:
            sql = line.rstrip("\r\n")
            if not sql.strip():
                continue
            if dml_only and not is_dml(sql):
                continue
            yield sql


def describe(sql: str) -> str:
    try:
        return extract_keyspace_id(sql).hex()
    except ReplicationUnfriendlyError:
        return "UNFRIENDLY"
    except ParseError as e:
        return f"ERROR {e}"


def main(argv: List[str]) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("files", nargs="*", type=argparse.FileType("r"), help="Defaults to stdin.")
    ap.add_argument("--dml-only", action="store_true", help="Skip statements that are not INSERT/UPDATE/DELETE.")
    ap.add_argument("--strict", action="store_true", help="Exit 1 if any statement fails to parse.")
    args = ap.parse_args(argv)

    failed = False
    try:
        for sql in iter_statements(args.files or [sys.stdin], dml_only=args.dml_only):
            out = describe(sql)
            failed = failed or out.startswith("ERROR ")
            sys.stdout.write(out + "\n")
        sys.stdout.flush()
    finally:
        for f in args.files:
            f.close()

    return 1 if (failed and args.strict) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
