from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """
    Convert a normalized record to JSON-serializable equivalents.

    - datetime/date values become ISO 8601 strings (offset kept)
    - tuples and sets become lists
    - anything else unknown falls back to its string form
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    return str(obj)


def dumps(record: Any, indent: int | None = 2) -> str:
    return json.dumps(to_jsonable(record), indent=indent, sort_keys=False)
