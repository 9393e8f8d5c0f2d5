"""Declarative field descriptors for binary layouts.

A layout is described as data: a Schema is an ordered tuple of Field
descriptors, and one generic routine (LayoutDecoder) walks any Schema.
Adding a chip family means adding tables, not decode logic.

Field Kinds:
    uint / int: 1, 2 or 4 byte integer (unsigned / two's complement)
    bytes: Fixed-length byte array
    bits: Integer word split into Bits sub-values
    struct: Nested Schema
    array: Repeated Schema or scalar Field, fixed or count-gated
    pad: Declared gap, consumed but not emitted

Byte order is not a property of a Field: every multi-byte integer in
these files is little-endian (see decoder.BYTE_ORDER).
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union


KIND_UINT = "uint"
KIND_INT = "int"
KIND_BYTES = "bytes"
KIND_BITS = "bits"
KIND_STRUCT = "struct"
KIND_ARRAY = "array"
KIND_PAD = "pad"

INT_WIDTHS = (1, 2, 4)
SCALAR_KINDS = {KIND_UINT, KIND_INT, KIND_BYTES, KIND_BITS, KIND_PAD}


@dataclass(frozen=True)
class Bits:
    """Sub-value packed inside an integer word.

    Attributes:
        name: Key of the sub-value in the decoded object
        lsb: Position of the least significant bit (0 = LSB of the word)
        width: Number of bits
        flag: Decode a 1-bit sub-value as bool instead of int
    """
    name: str
    lsb: int
    width: int
    flag: bool = False

    @property
    def mask(self) -> int:
        return ((1 << self.width) - 1) << self.lsb

    def extract(self, word: int):
        value = (word >> self.lsb) & ((1 << self.width) - 1)
        return bool(value) if self.flag else value


@dataclass(frozen=True)
class Field:
    """One entry of a Schema.

    Attributes:
        name: Key in the decoded object (verbatim format name)
        kind: One of the KIND_* constants
        width: Byte width (integers, bits words, byte arrays, padding)
        bits: Sub-values for KIND_BITS, in output order
        schema: Nested layout for KIND_STRUCT, or array element layout
        item: Scalar element for arrays of plain values
        count: Fixed repetition (int) or dotted name of a decoded field
        expect: Required value of an integer field
    """
    name: str
    kind: str
    width: int = 0
    bits: Tuple[Bits, ...] = ()
    schema: Optional["Schema"] = None
    item: Optional["Field"] = None
    count: Union[int, str, None] = None
    expect: Optional[int] = None

    def __post_init__(self):
        if self.kind in (KIND_UINT, KIND_INT, KIND_BITS) and self.width not in INT_WIDTHS:
            raise ValueError(f"{self.name}: integer width must be 1, 2 or 4, got {self.width}")
        if self.kind == KIND_BITS:
            used = 0
            for sub in self.bits:
                if sub.width < 1 or sub.lsb < 0 or sub.lsb + sub.width > self.width * 8:
                    raise ValueError(f"{self.name}.{sub.name}: bit range outside {self.width}-byte word")
                if sub.flag and sub.width != 1:
                    raise ValueError(f"{self.name}.{sub.name}: flag must be a single bit")
                if used & sub.mask:
                    raise ValueError(f"{self.name}.{sub.name}: overlaps another sub-value")
                used |= sub.mask
        if self.kind == KIND_ARRAY:
            if (self.schema is None) == (self.item is None):
                raise ValueError(f"{self.name}: array needs exactly one of schema or item")
            if self.item is not None and self.item.kind not in SCALAR_KINDS - {KIND_PAD}:
                raise ValueError(f"{self.name}: array item must be a scalar field")
            if self.count is None:
                raise ValueError(f"{self.name}: array needs a count")
        if self.kind == KIND_STRUCT and self.schema is None:
            raise ValueError(f"{self.name}: struct needs a schema")

    @property
    def is_count_gated(self) -> bool:
        return self.kind == KIND_ARRAY and isinstance(self.count, str)

    @property
    def element_size(self) -> Optional[int]:
        """Byte size of one array element, None if it varies."""
        if self.schema is not None:
            return self.schema.fixed_size
        return self.item.min_size

    @property
    def min_size(self) -> int:
        """Bytes this field needs at minimum (0 for count-gated arrays)."""
        if self.kind == KIND_STRUCT:
            return self.schema.min_size
        if self.kind == KIND_ARRAY:
            if self.is_count_gated:
                return 0
            element = self.schema.min_size if self.schema is not None else self.item.min_size
            return element * self.count
        return self.width

    @property
    def fixed_size(self) -> Optional[int]:
        if self.kind == KIND_STRUCT:
            return self.schema.fixed_size
        if self.kind == KIND_ARRAY:
            if self.is_count_gated or self.element_size is None:
                return None
            return self.element_size * self.count
        return self.width


@dataclass(frozen=True)
class Schema:
    """Ordered, immutable list of field descriptors.

    Attributes:
        name: Layout name (the C structure it mirrors)
        fields: Field descriptors in file order
    """
    name: str
    fields: Tuple[Field, ...]

    def __post_init__(self):
        names = [f.name for f in self.fields if f.kind != KIND_PAD]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"{self.name}: duplicate field names {sorted(duplicates)}")

    @property
    def min_size(self) -> int:
        """Sum of fixed-size fields, count-gated sections counted as empty."""
        return sum(f.min_size for f in self.fields)

    @property
    def fixed_size(self) -> Optional[int]:
        """Total size when no section depends on a decoded count."""
        total = 0
        for f in self.fields:
            size = f.fixed_size
            if size is None:
                return None
            total += size
        return total

    def locate_shortfall(self, available: int, path: str = "") -> Optional[Tuple[str, int, int]]:
        """Find the first field that cannot be read from `available` bytes.

        Only statically sized content is considered: count-gated arrays
        are taken as empty.

        Args:
            available: Bytes available from the start of the schema
            path: Dotted prefix for the returned field name

        Returns:
            (field_path, relative_offset, field_min_size) or None if the
            minimum layout fits
        """
        cursor = 0
        for f in self.fields:
            name = f"{path}.{f.name}" if path else f.name
            size = f.min_size
            if cursor + size > available:
                if f.kind == KIND_STRUCT:
                    inner = f.schema.locate_shortfall(available - cursor, name)
                    if inner is not None:
                        inner_path, inner_offset, inner_size = inner
                        return inner_path, cursor + inner_offset, inner_size
                return name, cursor, size
            cursor += size
        return None


# =========================================================================
# Descriptor constructors
# =========================================================================

def u8(name: str, expect: Optional[int] = None) -> Field:
    return Field(name, KIND_UINT, 1, expect=expect)


def u16(name: str, expect: Optional[int] = None) -> Field:
    return Field(name, KIND_UINT, 2, expect=expect)


def u32(name: str, expect: Optional[int] = None) -> Field:
    return Field(name, KIND_UINT, 4, expect=expect)


def s8(name: str) -> Field:
    return Field(name, KIND_INT, 1)


def s16(name: str) -> Field:
    return Field(name, KIND_INT, 2)


def s32(name: str) -> Field:
    return Field(name, KIND_INT, 4)


def byte_array(name: str, length: int) -> Field:
    return Field(name, KIND_BYTES, length)


def bitfield(name: str, width: int, *bits: Bits) -> Field:
    return Field(name, KIND_BITS, width, bits=tuple(bits))


def nested(name: str, schema: Schema) -> Field:
    return Field(name, KIND_STRUCT, schema=schema)


def array(name: str, element: Union[Schema, Field], count: Union[int, str]) -> Field:
    """Repeated block of a nested schema or a scalar field.

    Args:
        name: Field name
        element: Schema for struct elements, Field for scalar elements
        count: Fixed number of elements, or dotted name of a decoded field
    """
    if isinstance(element, Schema):
        return Field(name, KIND_ARRAY, schema=element, count=count)
    return Field(name, KIND_ARRAY, item=element, count=count)


def padding(name: str, length: int) -> Field:
    return Field(name, KIND_PAD, length)


def layout(name: str, *fields: Field) -> Schema:
    return Schema(name, tuple(fields))
