"""sqlannotation.

Public API:
    - annotate_if_dml(...), add_keyspace_id(...), is_dml(...): annotate DML
    - extract_keyspace_id(...): read the keyspace id back
    - Annotator: injectable annotator (counter + throttled logger)
    - connect(...), patch_pymysql(...), patch_sqlalchemy(...): annotate at
      statement-generation time
"""

from .annotation import (
    UNFRIENDLY_ANNOTATION,
    Annotator,
    add_keyspace_id,
    annotate_if_dml,
    default_annotator,
    extract_keyspace_id,
    set_default_annotator,
)
from .connect import connect
from .dbapi.classify import is_dml
from .errors import ExtractKeyspaceIdError, ParseError, ReplicationUnfriendlyError
from .monkeypatch import patch_pymysql, patch_sqlalchemy

__all__ = [
    "UNFRIENDLY_ANNOTATION",
    "Annotator",
    "ExtractKeyspaceIdError",
    "ParseError",
    "ReplicationUnfriendlyError",
    "add_keyspace_id",
    "annotate_if_dml",
    "connect",
    "default_annotator",
    "extract_keyspace_id",
    "is_dml",
    "patch_pymysql",
    "patch_sqlalchemy",
    "set_default_annotator",
]
