import json
from typing import Any


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """
    Deterministic JSON:
      - sort_keys=True
      - ensure_ascii=False
      - stable separators when indent is None
      - NaN/Infinity rejected, they are not JSON
    """
    if indent is None:
        return json.dumps(
            obj,
            sort_keys=True,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    return json.dumps(
        obj, sort_keys=True, ensure_ascii=False, indent=indent, allow_nan=False
    )


def json_line(obj: Any) -> str:
    """One compact, key-sorted JSON document without the trailing newline."""
    return stable_json_dumps(obj, indent=None)
