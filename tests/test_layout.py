"""Tests for GTX8 layout tables and the schema registry."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from gtx8_cfg.gtx8 import (
    BIN_HEAD,
    BIN_PREFIX,
    GTX8_LAYOUT,
    PKG_CONST_INFO,
    PKG_HEAD,
    PKG_REG,
    PKG_REG_INFO,
)
from gtx8_cfg.registry import SchemaRegistry, get_registry


class TestGTX8Sizes:
    """Static sizes must match the packed driver structures."""

    def test_bin_head(self):
        assert BIN_HEAD.fixed_size == 10

    def test_bin_prefix_minimum(self):
        """Head plus 6 reserved bytes; the offset table is count-gated."""
        assert BIN_PREFIX.min_size == 16
        assert BIN_PREFIX.fixed_size is None

    def test_const_info(self):
        assert PKG_CONST_INFO.fixed_size == 56

    def test_reg(self):
        assert PKG_REG.fixed_size == 4

    def test_reg_info(self):
        """14 registers plus 9 reserved bytes."""
        assert PKG_REG_INFO.fixed_size == 65
        assert len(PKG_REG_INFO.fields) == 15

    def test_pkg_head(self):
        assert PKG_HEAD.fixed_size == 121

    def test_field_names_verbatim(self):
        """Head field names match the driver structure."""
        assert [f.name for f in BIN_HEAD.fields] == ["bin_len", "checksum", "bin_version", "pkg_num"]


class TestSchemaRegistry:
    """Test the frozen chip-family registry."""

    def test_gtx8_registered(self):
        registry = SchemaRegistry()
        assert registry.names() == ["gtx8"]
        assert registry.get("gtx8") is GTX8_LAYOUT

    def test_lookup_case_insensitive(self):
        assert SchemaRegistry().get("GTX8") is GTX8_LAYOUT

    def test_unknown_family(self):
        with pytest.raises(KeyError):
            SchemaRegistry().get("gt9xx")

    def test_frozen(self):
        """Registration after initialization is refused."""
        registry = SchemaRegistry()
        assert registry.is_frozen() is True
        with pytest.raises(RuntimeError):
            registry.register(GTX8_LAYOUT)

    def test_singleton(self):
        assert get_registry() is get_registry()
