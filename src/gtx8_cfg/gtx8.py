"""GTX8 cfg group layout tables.

Field names, widths and order follow the packed structures the Goodix
GTX8 touch driver reads a cfg group file into:

    goodix_cfg_bin_head        (10 bytes) + 6 reserved bytes
    offset table               (pkg_num x u16, absolute package offsets)
    per package:
        goodix_cfg_pkg_const_info  (56 bytes)
        goodix_cfg_pkg_reg_info    (65 bytes)
        ic config data             (rest of the package, <= 4096 bytes)

The driver does not check reserved bytes, so no field here carries an
expected value.
"""

from dataclasses import dataclass

from .schema import Schema, array, byte_array, layout, nested, padding, u8, u16, u32


TS_BIN_VERSION_START_INDEX = 5
TS_BIN_VERSION_LEN = 4
TS_CFG_BIN_HEAD_RESERVED_LEN = 6
TS_IC_TYPE_NAME_MAX_LEN = 15
TS_CFG_BLOCK_PID_LEN = 8
TS_CFG_BLOCK_VID_LEN = 8
TS_CFG_BLOCK_FW_MASK_LEN = 9
TS_CFG_BLOCK_FW_PATCH_LEN = 4
TS_CFG_BLOCK_RESERVED_LEN = 9

GOODIX_CFG_MAX_SIZE = 4096


BIN_HEAD = layout(
    "goodix_cfg_bin_head",
    u32("bin_len"),
    u8("checksum"),
    byte_array("bin_version", TS_BIN_VERSION_LEN),
    u8("pkg_num"),
)

# Head, reserved gap and the offset table that follows it
BIN_PREFIX = layout(
    "goodix_cfg_bin_prefix",
    nested("head", BIN_HEAD),
    padding("head_reserved", TS_CFG_BIN_HEAD_RESERVED_LEN),
    array("pkg_offsets", u16("offset"), count="head.pkg_num"),
)

PKG_CONST_INFO = layout(
    "goodix_cfg_pkg_const_info",
    u32("pkg_len"),
    byte_array("ic_type", TS_IC_TYPE_NAME_MAX_LEN),
    u8("cfg_type"),
    u8("sensor_id"),
    byte_array("hw_pid", TS_CFG_BLOCK_PID_LEN),
    byte_array("hw_vid", TS_CFG_BLOCK_VID_LEN),
    byte_array("fw_mask", TS_CFG_BLOCK_FW_MASK_LEN),
    byte_array("fw_patch", TS_CFG_BLOCK_FW_PATCH_LEN),
    u16("x_res_offset"),
    u16("y_res_offset"),
    u16("trigger_offset"),
)

PKG_REG = layout(
    "goodix_cfg_pkg_reg",
    u16("addr"),
    u8("reserved1"),
    u8("reserved2"),
)

REG_NAMES = (
    "cfg_send_flag",
    "version_base",
    "pid",
    "vid",
    "sensor_id",
    "fw_mask",
    "fw_status",
    "cfg_addr",
    "esd",
    "command",
    "coor",
    "gesture",
    "fw_request",
    "proximity",
)

PKG_REG_INFO = layout(
    "goodix_cfg_pkg_reg_info",
    *(nested(name, PKG_REG) for name in REG_NAMES),
    byte_array("reserved", TS_CFG_BLOCK_RESERVED_LEN),
)

PKG_HEAD = layout(
    "goodix_cfg_pkg_head",
    nested("cnst_info", PKG_CONST_INFO),
    nested("reg_info", PKG_REG_INFO),
)


@dataclass(frozen=True)
class ChipLayout:
    """Everything the file decoder needs to know about one chip family.

    Attributes:
        name: Family name used on the command line
        bin_prefix: Head, reserved gap and offset table
        pkg_head: Fixed header at the start of every package
        checksum_start: First byte covered by the head checksum
        cfg_max_size: Largest IC config block the driver accepts
    """
    name: str
    bin_prefix: Schema
    pkg_head: Schema
    checksum_start: int
    cfg_max_size: int


GTX8_LAYOUT = ChipLayout(
    name="gtx8",
    bin_prefix=BIN_PREFIX,
    pkg_head=PKG_HEAD,
    checksum_start=TS_BIN_VERSION_START_INDEX,
    cfg_max_size=GOODIX_CFG_MAX_SIZE,
)
