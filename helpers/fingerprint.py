"""Content fingerprint over a subset of record fields."""

import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any


def _pick(record: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return {f: record.get(f) for f in fields}
    return {f: getattr(record, f, None) for f in fields}


def fingerprint(records: Iterable[Any], fields: Iterable[str]) -> str:
    """Deterministic digest of `fields` across records, in record order.

    Fields outside the subset never affect the result.
    """
    selected = tuple(sorted(set(fields)))
    payload = [_pick(r, selected) for r in records]
    data = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(data.encode("utf-8")).hexdigest()
