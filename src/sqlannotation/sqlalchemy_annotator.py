from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from .annotation import Annotator, KeyspaceId
from .config.settings import Settings

logger = logging.getLogger(__name__)


def _keyspace_ids_from(sa_conn: Any, context: Any, option: str) -> Optional[Sequence[KeyspaceId]]:
    opts = getattr(context, "execution_options", None) if context is not None else None
    if opts is None:
        opts = sa_conn.get_execution_options()
    return opts.get(option)


def instrument_engine(*, engine: Any, annotator: Annotator, settings: Settings) -> None:
    """Annotate DML executed through 'engine'.

    Keyspace ids are read from the execution option named by
    ``settings.keyspace_ids_option``::

        conn.execute(stmt.execution_options(keyspace_ids=[b"\\x01"]))
    """
    from sqlalchemy import event  # type: ignore

    @event.listens_for(engine, "before_cursor_execute", retval=True)
    def _before_cursor_execute(sa_conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool):  # noqa: ANN401,E501
        if not settings.annotate_enabled:
            return statement, parameters

        keyspace_ids = _keyspace_ids_from(sa_conn, context, settings.keyspace_ids_option)
        if keyspace_ids is None:
            if not settings.annotate_unrouted:
                return statement, parameters
            keyspace_ids = ()

        return annotator.annotate_if_dml(statement, keyspace_ids), parameters

    logger.debug("Instrumented engine %r", engine)
