"""Result writer producing JSON documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping


def write_result(path: str | Path, record: Mapping[str, object]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(record, handle, default=_json_fallback, indent=2)
        handle.write("\n")


def _json_fallback(obj):
    if hasattr(obj, "tolist"):
        return obj.tolist()
    if hasattr(obj, "numerator") and hasattr(obj, "denominator"):
        return float(obj)
    raise TypeError(f"object of type {type(obj)!r} is not JSON serializable")
