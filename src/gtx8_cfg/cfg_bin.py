"""Whole-file decode of a cfg group binary.

Pipeline:
    RawBuffer → PREFIX (head, offset table) → VERIFY (length, checksum)
              → PACKAGES (header + IC config per offset) → tree

Packages are located through the offset table rather than read
sequentially: package i spans [offset[i], offset[i+1]), the last one
runs to the end of the file. Any failure aborts the whole decode.
"""

import logging
from typing import Any, Dict

from .decoder import LayoutDecoder
from .errors import SchemaViolation, TruncatedInput
from .gtx8 import ChipLayout, GTX8_LAYOUT

logger = logging.getLogger(__name__)


def checksum8(data, start: int) -> int:
    """8-bit wrapping sum of data[start:]."""
    return sum(memoryview(data)[start:]) & 0xFF


def parse_cfg_bin(data, layout: ChipLayout = GTX8_LAYOUT, verify: bool = True) -> Dict[str, Any]:
    """Decode a complete cfg group file.

    Args:
        data: File contents (None is treated as an empty buffer)
        layout: Chip family layout
        verify: Check bin_len against the file size and the head checksum

    Returns:
        Ordered tree with "head", "cfg_pkgs" and "ic_configs"

    Raises:
        TruncatedInput: File too short for a field, table or package
        SchemaViolation: Length, checksum, offset or size check failed
    """
    data = b"" if data is None else bytes(data)
    total = len(data)

    prefix = LayoutDecoder(layout.bin_prefix).decode(data)
    head = prefix["head"]
    offsets = prefix["pkg_offsets"]
    logger.debug("%s head: bin_len=%d pkg_num=%d file=%d bytes",
                 layout.name, head["bin_len"], head["pkg_num"], total)

    if verify:
        _verify_head(data, head, layout)

    pkg_decoder = LayoutDecoder(layout.pkg_head)
    head_len = layout.pkg_head.fixed_size
    cfg_pkgs = []
    ic_configs: Dict[str, Dict[str, Any]] = {}

    for i, start in enumerate(offsets):
        name = f"cfg_pkgs[{i}]"
        if i == len(offsets) - 1:
            end = total
        else:
            end = offsets[i + 1]
            if end <= start:
                raise SchemaViolation(
                    f"pkg_offsets[{i + 1}]",
                    _offset_entry_pos(layout, i + 1),
                    end,
                    reason=f"package offset {end} not after previous offset {start}",
                )
            if end > total:
                raise TruncatedInput(name, start, end - start, total - start)

        # Bounded to the package so a short package fails inside its own header
        pkg = pkg_decoder.decode(data, offset=start, end=end, path=name)
        pkg_len = end - start
        pkg["pkg_len"] = pkg_len

        cfg_len = pkg_len - head_len
        if cfg_len > layout.cfg_max_size:
            raise SchemaViolation(
                name, start, cfg_len, layout.cfg_max_size,
                reason=f"config data is {cfg_len} bytes, limit {layout.cfg_max_size}",
            )

        cfg_type = pkg["cnst_info"]["cfg_type"]
        logger.debug("%s: offset=%d len=%d cfg_type=%d sensor_id=%d",
                     name, start, pkg_len, cfg_type, pkg["cnst_info"]["sensor_id"])
        if str(cfg_type) in ic_configs:
            logger.debug("%s: cfg_type %d replaces an earlier package", name, cfg_type)

        ic_configs[str(cfg_type)] = {
            "len": cfg_len,
            "data": data[start + head_len:end],
        }
        cfg_pkgs.append(pkg)

    return {
        "head": head,
        "cfg_pkgs": cfg_pkgs,
        "ic_configs": ic_configs,
    }


def _verify_head(data: bytes, head: Dict[str, Any], layout: ChipLayout) -> None:
    if head["bin_len"] != len(data):
        raise SchemaViolation("head.bin_len", 0, head["bin_len"], len(data),
                              reason=f"bin_len {head['bin_len']} but file is {len(data)} bytes")

    actual = checksum8(data, layout.checksum_start)
    if actual != head["checksum"]:
        raise SchemaViolation("head.checksum", 4, head["checksum"], actual)


def _offset_entry_pos(layout: ChipLayout, index: int) -> int:
    table_start = layout.bin_prefix.min_size
    return table_start + 2 * index
