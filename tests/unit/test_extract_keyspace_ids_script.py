from __future__ import annotations

import io

import pytest

from scripts.extract_keyspace_ids import describe, iter_statements, main


def test_describe() -> None:
    assert describe("UPDATE t SET x=1 /* vtgate:: keyspace_id:0a */") == "0a"
    assert describe("UPDATE t SET x=1 /* vtgate:: filtered_replication_unfriendly */") == "UNFRIENDLY"
    assert describe("UPDATE t SET x=1").startswith("ERROR Parse-Error.")


def test_iter_statements_skips_blank_and_non_dml() -> None:
    stream = io.StringIO("BEGIN\n\nINSERT INTO t VALUES (1)\r\nCOMMIT\n")
    assert list(iter_statements([stream], dml_only=True)) == ["INSERT INTO t VALUES (1)"]


def test_main_reads_files(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "stmts.sql"
    path.write_text(
        "INSERT INTO t VALUES (1) /* vtgate:: keyspace_id:ff00 */\n"
        "DELETE FROM t\n",
        encoding="utf-8",
    )
    assert main([str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "ff00"
    assert out[1].startswith("ERROR ")

    assert main(["--strict", str(path)]) == 1


def test_main_closes_files_when_reading_fails(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    import scripts.extract_keyspace_ids as script

    path = tmp_path / "stmts.sql"
    path.write_text("DELETE FROM t\n", encoding="utf-8")
    opened = []

    def failing_iter(streams, *, dml_only):
        opened.extend(streams)
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        yield  # pragma: no cover

    monkeypatch.setattr(script, "iter_statements", failing_iter)
    with pytest.raises(UnicodeDecodeError):
        script.main([str(path)])

    assert len(opened) == 1
    assert opened[0].closed
