"""Keyspace-id annotations for DML statements.

Annotations are appended to DML statements when they are generated and read
back during filtered replication to route each statement to the right shard.
A statement carries either a keyspace-id comment::

    UPDATE t SET x=1 /* vtgate:: keyspace_id:0a1b */

or, when it does not target exactly one keyspace id, the
filtered-replication-unfriendly marker.
"""

from __future__ import annotations

import binascii
import logging
import threading
from typing import Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from .config.settings import Settings
from .dbapi.classify import is_dml
from .errors import ParseError, ReplicationUnfriendlyError
from .logutil import ThrottledLogger
from .stats import new_counter

logger = logging.getLogger(__name__)

KEYSPACE_ID_PREFIX = "/* vtgate:: keyspace_id:"
UNFRIENDLY_ANNOTATION = "/* vtgate:: filtered_replication_unfriendly */"

KeyspaceId = Union[bytes, bytearray, memoryview]


@runtime_checkable
class CounterSink(Protocol):
    def increment(self) -> int: ...


@runtime_checkable
class WarningSink(Protocol):
    def warning(self, msg: str, *args: object) -> bool: ...


class Annotator:
    """Annotates DML statements and records replication-unfriendly ones.

    The counter and the throttled logger are process-wide collaborators, so a
    single Annotator is normally shared by every caller (see
    ``default_annotator``).
    """

    def __init__(self, *, counter: CounterSink, logger: WarningSink) -> None:
        self._counter = counter
        self._logger = logger

    @classmethod
    def from_settings(cls, settings: Settings) -> "Annotator":
        return cls(
            counter=new_counter(settings.unfriendly_counter_name),
            logger=ThrottledLogger(settings.unfriendly_logger_name, settings.unfriendly_log_interval_s),
        )

    def annotate_if_dml(self, sql: str, keyspace_ids: Sequence[KeyspaceId]) -> str:
        """Annotate 'sql' based on 'keyspace_ids'.

        Non-DML statements are returned unchanged. A DML statement with exactly
        one keyspace id gets a keyspace-id comment; any other DML statement is
        marked as filtered-replication-unfriendly.
        """
        if not is_dml(sql):
            return sql
        if len(keyspace_ids) == 1:
            return add_keyspace_id(sql, keyspace_ids[0])
        self._counter.increment()
        self._logger.warning("filtered-replication-unfriendly SQL statement detected: %r", sql)
        return f"{sql} {UNFRIENDLY_ANNOTATION}"


def add_keyspace_id(sql: str, keyspace_id: KeyspaceId, trailing_comments: str = "") -> str:
    """Return 'sql' annotated with 'keyspace_id', followed by 'trailing_comments'."""
    return f"{sql} {KEYSPACE_ID_PREFIX}{bytes(keyspace_id).hex()} */{trailing_comments}"


def extract_keyspace_id(sql: str) -> bytes:
    """Parse the annotation of 'sql' and return its keyspace id.

    Raises ReplicationUnfriendlyError if the statement is annotated as
    filtered-replication-unfriendly, and ParseError if there is no annotation,
    the keyspace id is not valid hex, or both annotations are present.
    """
    value, has_keyspace_id = _extract_between(sql, KEYSPACE_ID_PREFIX, " ")
    has_unfriendly = UNFRIENDLY_ANNOTATION in sql

    if has_keyspace_id:
        if has_unfriendly:
            raise ParseError(f"Conflicting annotations in statement '{sql}'", sql=sql)
        try:
            return binascii.unhexlify(value)
        except (binascii.Error, ValueError) as e:
            raise ParseError(f"Error parsing keyspace id value in statement: {sql} ({e})", sql=sql) from e

    if has_unfriendly:
        raise ReplicationUnfriendlyError(f"Statement: {sql}", sql=sql)

    raise ParseError(f"No annotation found in '{sql}'", sql=sql)


def _extract_between(source: str, left: str, right: str) -> Tuple[str, bool]:
    # Text after the leftmost 'left' up to the next 'right' (or end of string).
    start = source.find(left)
    if start == -1:
        return "", False
    start += len(left)
    end = source.find(right, start)
    if end == -1:
        return source[start:], True
    return source[start:end], True


_DEFAULT: Optional[Annotator] = None
_DEFAULT_LOCK = threading.Lock()


def default_annotator() -> Annotator:
    """Process-wide annotator built from ``Settings.from_env()`` on first use."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = Annotator.from_settings(Settings.from_env())
            logger.debug("Created default annotator")
        return _DEFAULT


def set_default_annotator(annotator: Optional[Annotator]) -> None:
    """Replace the process-wide annotator (None rebuilds it lazily)."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        _DEFAULT = annotator


def annotate_if_dml(sql: str, keyspace_ids: Sequence[KeyspaceId], *, annotator: Optional[Annotator] = None) -> str:
    return (annotator or default_annotator()).annotate_if_dml(sql, keyspace_ids)
