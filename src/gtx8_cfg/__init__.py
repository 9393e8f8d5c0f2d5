"""gtx8_cfg: Decoder for Goodix GTX8 touch-controller cfg group files.

A cfg group file bundles one configuration package per sensor ID. This
package turns such a file into an ordered tree of named values that
mirrors the packed structures the GTX8 driver reads, and renders that
tree as JSON.

Architecture:
    RawBuffer → LayoutDecoder(schema) → tree → render_json
                     |
            [declarative Schema tables, little-endian, no in-place casts]

Modules:
    schema: Field descriptors and static size computation
    decoder: Generic field-walking LayoutDecoder
    gtx8: GTX8 cfg group layout tables
    registry: Frozen registry of chip-family layouts
    cfg_bin: Whole-file decode with length, checksum and offset checks
    render: JSON presentation of decoded trees
    errors: TruncatedInput and SchemaViolation
"""

__version__ = "0.1.0"

from .errors import DecodeError, TruncatedInput, SchemaViolation
from .schema import Bits, Field, Schema
from .decoder import LayoutDecoder
from .gtx8 import ChipLayout, GTX8_LAYOUT
from .registry import SchemaRegistry, get_registry
from .cfg_bin import parse_cfg_bin
from .render import render_json, to_jsonable

__all__ = [
    "DecodeError",
    "TruncatedInput",
    "SchemaViolation",
    "Bits",
    "Field",
    "Schema",
    "LayoutDecoder",
    "ChipLayout",
    "GTX8_LAYOUT",
    "SchemaRegistry",
    "get_registry",
    "parse_cfg_bin",
    "render_json",
    "to_jsonable",
]
