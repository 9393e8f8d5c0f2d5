"""JSON rendering of decoded trees.

Structural mirror only: objects stay objects in schema order, repeated
blocks become arrays, byte arrays become arrays of decimal integers.
"""

import json
from typing import Any, Optional


def to_jsonable(value: Any) -> Any:
    """Convert a decoded tree into plain JSON-compatible values."""
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    return value


def render_json(tree: Any, indent: Optional[int] = 2) -> str:
    """Render a decoded tree as JSON text.

    Args:
        tree: Decoded tree
        indent: Spaces per level, None for a single line

    Returns:
        JSON document (no trailing newline)
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(to_jsonable(tree), indent=indent, separators=separators)
