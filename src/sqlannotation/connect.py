from __future__ import annotations

from typing import Any, Callable, Optional

from .annotation import Annotator, default_annotator
from .config.settings import Settings
from .dbapi.wrappers import AnnotatingConnection
from .errors import DriverAdapterError

_CONNECT_FUNC: Optional[Callable[..., Any]] = None


def set_connect_func(func: Optional[Callable[..., Any]]) -> None:
    """Inject the real (unpatched) pymysql connect function."""
    global _CONNECT_FUNC
    _CONNECT_FUNC = func


def _pymysql_connect(**kwargs: Any) -> Any:
    if _CONNECT_FUNC is not None:
        return _CONNECT_FUNC(**kwargs)
    import pymysql  # type: ignore

    return pymysql.connect(**kwargs)


def _database_name(conn: Any, connect_kwargs: dict[str, Any]) -> Optional[str]:
    for k in ("db", "database"):
        v = connect_kwargs.get(k)
        if v:
            return str(v)
    for attr in ("db", "database"):
        v = getattr(conn, attr, None)
        if isinstance(v, bytes):
            return v.decode("utf-8", errors="replace")
        if v:
            return str(v)
    return None


def connect(
    *,
    driver: str = "pymysql",
    annotator: Optional[Annotator] = None,
    settings: Optional[Settings] = None,
    **connect_kwargs: Any,
) -> AnnotatingConnection:
    if driver != "pymysql":
        raise DriverAdapterError(f"Unsupported driver: {driver!r}")
    settings = settings or Settings.from_env()
    annotator = annotator or default_annotator()

    conn = _pymysql_connect(**connect_kwargs)
    return AnnotatingConnection(
        conn=conn,
        annotator=annotator,
        settings=settings,
        driver_name=driver,
        database=_database_name(conn, connect_kwargs),
    )
