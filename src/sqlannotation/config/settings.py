from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import List, Optional


def _env(name: str) -> Optional[str]:
    v = os.getenv(name)
    return v if v not in (None, "") else None


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    v = _env(name)
    if v is None:
        return default
    try:
        return float(v.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class EnvSpec:
    env: str
    field: str
    kind: str  # "str" | "bool" | "float"


def _coerce_env(spec: EnvSpec, *, default: object) -> object:
    if spec.kind == "str":
        v = _env(spec.env)
        return default if v is None else v.strip()
    if spec.kind == "bool":
        return _env_bool(spec.env, bool(default))
    if spec.kind == "float":
        return _env_float(spec.env, float(default))
    return default


@dataclass(frozen=True)
class Settings:
    """Static configuration loaded from environment (once)."""

    # Generation-time wrappers
    annotate_enabled: bool = True
    annotate_unrouted: bool = False  # no keyspace ids given -> mark as unfriendly
    keyspace_ids_option: str = "keyspace_ids"  # SQLAlchemy execution option

    # Unfriendly-statement bookkeeping
    unfriendly_counter_name: str = "FilteredReplicationUnfriendlyStatementsCount"
    unfriendly_logger_name: str = "FilteredReplicationUnfriendlyStatement"
    unfriendly_log_interval_s: float = 5.0

    @classmethod
    def from_env(cls) -> "Settings":
        base = cls()
        overrides: dict[str, object] = {}
        for spec in ENV_SPECS:
            overrides[spec.field] = _coerce_env(spec, default=getattr(base, spec.field))
        return replace(base, **overrides)


ENV_SPECS: List[EnvSpec] = [
    EnvSpec("SQLANNOTATION_ENABLED", "annotate_enabled", "bool"),
    EnvSpec("SQLANNOTATION_ANNOTATE_UNROUTED", "annotate_unrouted", "bool"),
    EnvSpec("SQLANNOTATION_KEYSPACE_IDS_OPTION", "keyspace_ids_option", "str"),

    EnvSpec("SQLANNOTATION_UNFRIENDLY_COUNTER", "unfriendly_counter_name", "str"),
    EnvSpec("SQLANNOTATION_UNFRIENDLY_LOGGER", "unfriendly_logger_name", "str"),
    EnvSpec("SQLANNOTATION_UNFRIENDLY_LOG_INTERVAL_S", "unfriendly_log_interval_s", "float"),
]
