from __future__ import annotations

import re
from typing import Optional

_DML = {"insert", "update", "delete"}

# Whitespace as in \s, minus the \x1c-\x1f separators (not spaces for SQL).
_WS = r"[^\S\x1c-\x1f]"
_NON_WS = r"[\S\x1c-\x1f]"

# The first token only counts when whitespace follows it.
_FIRST_WORD = re.compile(rf"{_WS}*({_NON_WS}+){_WS}")


def first_word(sql: str) -> Optional[str]:
    if not sql:
        return None
    m = _FIRST_WORD.match(sql)
    return m.group(1) if m else None


def is_dml(sql: str) -> bool:
    """Return True if 'sql' is an INSERT, UPDATE or DELETE statement."""
    word = first_word(sql)
    return word is not None and word.casefold() in _DML
