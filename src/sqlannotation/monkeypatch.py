from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Optional

from .annotation import Annotator, default_annotator
from .config.settings import Settings
from .connect import connect, set_connect_func
from .sqlalchemy_annotator import instrument_engine


def patch_pymysql(*, annotator: Optional[Annotator] = None, settings: Optional[Settings] = None) -> Callable[[], None]:
    try:
        import pymysql  # type: ignore
    except Exception as e:
        raise RuntimeError("pymysql is not installed") from e

    settings = settings or Settings.from_env()
    original = pymysql.connect

    # connect() must reach the unpatched driver function.
    set_connect_func(original)

    def _bind_connect_args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Dict[str, Any]:
        sig = inspect.signature(original)
        bound = sig.bind_partial(*args, **kwargs)
        out: Dict[str, Any] = {}
        for k, v in bound.arguments.items():
            if k == "kwargs" and isinstance(v, dict):
                out.update(v)
            else:
                out[k] = v
        return out

    def _patched_connect(*args: Any, **kwargs: Any):
        conn_kwargs = _bind_connect_args(args, kwargs)
        return connect(driver="pymysql", annotator=annotator, settings=settings, **conn_kwargs)

    pymysql.connect = _patched_connect  # type: ignore[attr-defined]

    def unpatch() -> None:
        pymysql.connect = original  # type: ignore[attr-defined]
        set_connect_func(None)

    return unpatch


def patch_sqlalchemy(*, annotator: Optional[Annotator] = None, settings: Optional[Settings] = None) -> Callable[[], None]:
    try:
        import sqlalchemy  # type: ignore
    except Exception as e:
        raise RuntimeError("sqlalchemy is not installed") from e

    settings = settings or Settings.from_env()
    annotator = annotator or default_annotator()
    original = sqlalchemy.create_engine

    def _patched_create_engine(*args: Any, **kwargs: Any):
        engine = original(*args, **kwargs)
        instrument_engine(engine=engine, annotator=annotator, settings=settings)
        return engine

    sqlalchemy.create_engine = _patched_create_engine  # type: ignore[attr-defined]

    def unpatch() -> None:
        sqlalchemy.create_engine = original  # type: ignore[attr-defined]

    return unpatch
