"""Text codec for values written to the metadata store."""

import json
from typing import Any


def encode_value(value: Any) -> str:
    """Text passes through; anything else becomes stable (sorted, compact) JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def decode_value(text: str) -> Any:
    """Inverse of encode_value; non-JSON text is returned unchanged."""
    try:
        return json.loads(text)
    except ValueError:
        return text
