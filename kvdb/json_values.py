from __future__ import annotations

import json
from typing import Any


class _Omitted:
    def __repr__(self) -> str:
        return "OMITTED"


# Marks "no value passed", which is different from passing None ("null").
OMITTED: Any = _Omitted()


def _fallback(obj: Any) -> Any:
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    return str(obj)


def dump_json(value: Any) -> str | None:
    """
    Compact JSON for log lines.

    Returns None when the value was omitted. Types JSON can't encode
    (datetime, ObjectId, ...) are rendered with str().
    """
    if value is OMITTED:
        return None
    return json.dumps(value, separators=(",", ":"), default=_fallback, ensure_ascii=False)
