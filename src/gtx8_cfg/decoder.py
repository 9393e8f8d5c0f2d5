"""LayoutDecoder: generic field walker for declarative layouts.

The decoder reads a region of a byte buffer strictly in schema order:

    RawBuffer → [precondition: min_size] → FIELD → FIELD → ... → ordered dict

Every read slices an explicit byte range and assembles integers byte by
byte. Nothing is reinterpreted in place, so host struct alignment and
host byte order play no part.

BYTE_ORDER is a property of the file format: the touch controller and
its driver store every multi-byte integer least significant byte first,
and the decoder applies that convention on any host.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .errors import SchemaViolation, TruncatedInput
from .schema import (
    Field,
    Schema,
    KIND_ARRAY,
    KIND_BITS,
    KIND_BYTES,
    KIND_INT,
    KIND_PAD,
    KIND_STRUCT,
    KIND_UINT,
)

logger = logging.getLogger(__name__)

BYTE_ORDER = "little"


def read_le(data, signed: bool = False) -> int:
    """Assemble a little-endian integer from individual bytes.

    Args:
        data: 1 to 4 bytes, least significant first
        signed: Interpret as two's complement

    Returns:
        Integer value
    """
    value = 0
    for shift, byte in enumerate(data):
        value |= byte << (8 * shift)
    if signed and data and data[-1] & 0x80:
        value -= 1 << (8 * len(data))
    return value


class LayoutDecoder:
    """Decode byte regions according to a Schema.

    A decoder holds only its (immutable) schema, so one instance can be
    reused for any number of buffers.

    Attributes:
        schema: Layout to decode
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def decode(self, buf, offset: int = 0, end: Optional[int] = None, path: str = "") -> Dict[str, Any]:
        """Decode one schema instance.

        Args:
            buf: Raw bytes (None is treated as an empty buffer)
            offset: Absolute start of the region
            end: Absolute end of the region (default: end of buffer)
            path: Dotted prefix for field names in errors

        Returns:
            Ordered dict of decoded values

        Raises:
            TruncatedInput: Region shorter than a field needs
            SchemaViolation: A field with an expected value differs
        """
        tree, _ = self.decode_with_size(buf, offset, end, path)
        return tree

    def decode_with_size(self, buf, offset: int = 0, end: Optional[int] = None,
                         path: str = "") -> Tuple[Dict[str, Any], int]:
        """Decode one schema instance and report bytes consumed.

        Returns:
            (decoded dict, number of bytes consumed)
        """
        view = memoryview(b"" if buf is None else buf).cast("B")
        limit = len(view) if end is None else min(end, len(view))

        # Precondition on the statically known part of the layout
        available = limit - offset
        if available < self.schema.min_size:
            shortfall = self.schema.locate_shortfall(max(0, available), path)
            field_path, rel, size = shortfall
            raise TruncatedInput(field_path, offset + rel, size, available - rel)

        cursor = _Cursor(view, offset, limit)
        tree = self._walk(self.schema, cursor, path, [])
        logger.debug("decoded %s: %d bytes at offset %d", self.schema.name, cursor.pos - offset, offset)
        return tree, cursor.pos - offset

    # =========================================================================
    # Field walking
    # =========================================================================

    def _walk(self, schema: Schema, cursor: "_Cursor", path: str,
              scopes: List[Dict[str, Any]]) -> Dict[str, Any]:
        obj: Dict[str, Any] = {}
        scopes = scopes + [obj]
        for f in schema.fields:
            name = f"{path}.{f.name}" if path else f.name
            value = self._read_field(f, cursor, name, scopes)
            if f.kind != KIND_PAD:
                obj[f.name] = value
        return obj

    def _read_field(self, f: Field, cursor: "_Cursor", name: str,
                    scopes: List[Dict[str, Any]]):
        if f.kind == KIND_STRUCT:
            return self._walk(f.schema, cursor, name, scopes)

        if f.kind == KIND_ARRAY:
            return self._read_array(f, cursor, name, scopes)

        start = cursor.pos
        raw = cursor.take(f.width, name)

        if f.kind in (KIND_UINT, KIND_INT):
            value = read_le(raw, signed=f.kind == KIND_INT)
            if f.expect is not None and value != f.expect:
                raise SchemaViolation(name, start, value, f.expect)
            return value

        if f.kind == KIND_BITS:
            word = read_le(raw)
            return {sub.name: sub.extract(word) for sub in f.bits}

        if f.kind == KIND_BYTES:
            return bytes(raw)

        # KIND_PAD
        return None

    def _read_array(self, f: Field, cursor: "_Cursor", name: str,
                    scopes: List[Dict[str, Any]]) -> list:
        count = f.count if isinstance(f.count, int) else _resolve_count(f.count, scopes)
        if count < 0:
            raise SchemaViolation(name, cursor.pos, count, reason=f"negative repetition count {count}")

        element_size = f.element_size
        if element_size is not None and count * element_size > cursor.remaining:
            raise TruncatedInput(name, cursor.pos, count * element_size, cursor.remaining)

        items = []
        for i in range(count):
            item_name = f"{name}[{i}]"
            if f.schema is not None:
                items.append(self._walk(f.schema, cursor, item_name, scopes))
            else:
                items.append(self._read_field(f.item, cursor, item_name, scopes))
        return items


class _Cursor:
    """Read position inside [pos, limit) of a memoryview."""

    def __init__(self, view: memoryview, pos: int, limit: int):
        self.view = view
        self.pos = pos
        self.limit = limit

    @property
    def remaining(self) -> int:
        return self.limit - self.pos

    def take(self, width: int, name: str) -> memoryview:
        if width > self.remaining:
            raise TruncatedInput(name, self.pos, width, self.remaining)
        chunk = self.view[self.pos:self.pos + width]
        self.pos += width
        return chunk


def _resolve_count(ref: str, scopes: List[Dict[str, Any]]) -> int:
    """Look up a decoded integer by dotted name, innermost object first.

    Raises:
        KeyError: No enclosing object holds an integer under that name
    """
    parts = ref.split(".")
    for scope in reversed(scopes):
        value: Any = scope
        for part in parts:
            if not isinstance(value, dict) or part not in value:
                break
            value = value[part]
        else:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
    raise KeyError(f"Count field not decoded before use: {ref}")
