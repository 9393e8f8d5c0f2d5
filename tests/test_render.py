"""Tests for JSON rendering of decoded trees."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gtx8_cfg import parse_cfg_bin
from gtx8_cfg.render import render_json, to_jsonable

from test_cfg_bin import build_bin, build_pkg


class TestToJsonable:
    """Test conversion to plain JSON values."""

    def test_bytes_become_int_lists(self):
        assert to_jsonable({"id": b"\x01\xFF"}) == {"id": [1, 255]}

    def test_nested_structures(self):
        tree = {"a": [{"b": b"\x00"}], "flag": True, "n": -3}
        assert to_jsonable(tree) == {"a": [{"b": [0]}], "flag": True, "n": -3}


class TestRenderJson:
    """Test JSON text output."""

    def test_key_order_preserved(self):
        """Keys render in tree order, not sorted."""
        text = render_json({"zeta": 1, "alpha": 2})
        assert text.index('"zeta"') < text.index('"alpha"')

    def test_integers_decimal(self):
        assert render_json({"v": 0x04030201}, indent=None) == '{"v":67305985}'

    def test_compact(self):
        assert "\n" not in render_json({"a": [1, 2]}, indent=None)

    def test_indented(self):
        assert render_json({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_structure_round_trip(self):
        """JSON back to a tree gives the same values and array lengths."""
        pkgs = [build_pkg(cfg_type=0, cfg=b"\x01\x02"), build_pkg(cfg_type=7, cfg=b"")]
        tree = parse_cfg_bin(build_bin(pkgs))
        loaded = json.loads(render_json(tree))
        assert loaded == to_jsonable(tree)
        assert len(loaded["cfg_pkgs"]) == 2
        assert list(loaded["ic_configs"]) == ["0", "7"]
        assert loaded["ic_configs"]["0"]["data"] == [1, 2]
        assert list(loaded["cfg_pkgs"][0]["cnst_info"]) == list(tree["cfg_pkgs"][0]["cnst_info"])
