"""
JSON rendering of extracted records.

Output is a plain JSON array, one object per record, keys in declaration
order. No wrapper object and no metadata.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

from studipextract.model import Record


def serialize(records: Sequence[Record], indent: Optional[int] = None) -> str:
    """
    Render records as a JSON array string.

    All records must be of the same type. An empty sequence yields "[]".
    With indent=None the output is compact (like JSON.stringify).
    """
    kinds = {type(r) for r in records}
    if len(kinds) > 1:
        names = ", ".join(sorted(k.__name__ for k in kinds))
        raise ValueError(f"Cannot serialize mixed record types: {names}")

    payload = [r.to_dict() for r in records]

    if indent is None:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=False, indent=indent)
