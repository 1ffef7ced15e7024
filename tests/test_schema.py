"""
Tests for the tile table schema and flag handling
"""
import pytest
from pydantic import ValidationError

from swatchsmith.schema import Edge, EdgePolicy, TileDescriptor, TileFlags, TileTable


class TestTileFlags:
    """Test parsing and serialization of the capability set"""

    def test_parse_int_matches_names(self):
        """Test that the integer encoding and the name list agree"""
        from_int = TileFlags.parse(0x403)
        from_names = TileFlags.parse(["repeat_sides", "repeat_top_bottom", "synthesized"])
        assert from_int == from_names
        assert from_int == TileFlags.REPEAT_ALL | TileFlags.SYNTHESIZED

    def test_parse_presets_case_insensitive(self):
        """Test that preset names expand and case does not matter"""
        assert TileFlags.parse(["Clamp_All"]) == (
            TileFlags.CLAMP_TOP | TileFlags.CLAMP_BOTTOM | TileFlags.CLAMP_LEFT | TileFlags.CLAMP_RIGHT
        )
        assert TileFlags.parse("REPEAT_ALL") == TileFlags.REPEAT_ALL

    def test_parse_rejects_unknown(self):
        """Test that unknown names and bits are refused"""
        with pytest.raises(ValueError):
            TileFlags.parse(["sparkly"])
        with pytest.raises(ValueError):
            TileFlags.parse(0x10000)
        with pytest.raises(ValueError):
            TileFlags.parse(True)

    def test_capabilities_round_trip(self):
        """Test that capabilities() lists single bits in order and parses back"""
        flags = TileFlags.parse(["synthesized", "repeat_all", "decal"])
        names = flags.capabilities()
        assert names == ["repeat_sides", "repeat_top_bottom", "decal", "synthesized"]
        assert TileFlags.parse(names) == flags

    def test_empty_flags(self):
        """Test that no flags means no capabilities and transparent edges"""
        assert TileFlags.parse([]) == TileFlags.NONE
        assert TileFlags.parse(None) == TileFlags.NONE
        assert TileFlags.NONE.capabilities() == []
        assert set(TileFlags.NONE.edge_policies().values()) == {EdgePolicy.transparent}


class TestEdgePolicy:
    """Test that every edge gets exactly one policy"""

    @pytest.mark.parametrize("bits", range(0, 0x40))
    def test_each_edge_has_one_policy(self, bits):
        """Test all combinations of the six edge bits"""
        policies = TileFlags(bits).edge_policies()
        assert set(policies) == set(Edge)
        for policy in policies.values():
            assert policy in (EdgePolicy.repeat, EdgePolicy.clamp, EdgePolicy.transparent)

    def test_repeat_sides_else_clamp(self):
        """Test the mixed preset used by furnace and grass side tiles"""
        policies = TileFlags.REPEAT_SIDES_ELSE_CLAMP.edge_policies()
        assert policies[Edge.left] == EdgePolicy.repeat
        assert policies[Edge.right] == EdgePolicy.repeat
        assert policies[Edge.top] == EdgePolicy.clamp
        assert policies[Edge.bottom] == EdgePolicy.clamp

    def test_clamp_bottom_only(self):
        """Test that unflagged edges stay transparent"""
        policies = TileFlags.CLAMP_BOTTOM.edge_policies()
        assert policies[Edge.bottom] == EdgePolicy.clamp
        assert policies[Edge.top] == EdgePolicy.transparent
        assert policies[Edge.left] == EdgePolicy.transparent
        assert policies[Edge.right] == EdgePolicy.transparent

    def test_conflicts_reported(self):
        """Test that repeat plus clamp on one edge is detected"""
        flags = TileFlags.REPEAT_ALL | TileFlags.CLAMP_TOP
        assert flags.edge_conflicts() == [Edge.top]
        assert flags.edge_policy(Edge.top) == EdgePolicy.clamp
        assert TileFlags.REPEAT_SIDES_ELSE_CLAMP.edge_conflicts() == []


class TestTileDescriptor:
    """Test descriptor parsing and convenience properties"""

    def test_parse_from_json_shape(self):
        """Test that the JSON form validates into a descriptor"""
        tile = TileDescriptor.model_validate({
            "coordinate": [7, 2],
            "type_id": 31,
            "name": "grass",
            "legacy_name": "tallgrass",
            "flags": ["clamp_bottom", "decal", "synthesized"],
        })
        assert tile.coordinate == (7, 2)
        assert tile.column == 7 and tile.row == 2
        assert tile.data_value == 0
        assert tile.is_decal and tile.is_synthesized and tile.needs_color_bleed
        assert not tile.is_cutout_geometry and not tile.is_leaves
        assert str(tile) == "grass @ (7, 2)"

    def test_flags_accept_int(self):
        """Test that an integer bitmask is accepted at the boundary"""
        tile = TileDescriptor(coordinate=(0, 0), type_id=1, name="x", flags=0x80 | 0x3C)
        assert tile.is_cutout_geometry
        assert tile.flags == TileFlags.CLAMP_ALL | TileFlags.CUTOUT_GEOMETRY

    def test_serializes_capabilities(self):
        """Test that flags dump as single-capability names"""
        tile = TileDescriptor(coordinate=(0, 0), type_id=2, name="grass_block_top",
                              flags=["repeat_all", "synthesized"])
        dumped = tile.model_dump()
        assert dumped["flags"] == ["repeat_sides", "repeat_top_bottom", "synthesized"]
        assert TileDescriptor.model_validate(dumped) == tile

    def test_placeholder(self):
        """Test that an empty name marks an unused slot"""
        tile = TileDescriptor(coordinate=(13, 46), type_id=0)
        assert tile.is_placeholder
        assert str(tile) == "<unused> @ (13, 46)"

    def test_frozen_and_hashable(self):
        """Test that descriptors are immutable and usable as keys"""
        tile = TileDescriptor(coordinate=(1, 0), type_id=1, name="stone", flags=["repeat_all"])
        with pytest.raises(ValidationError):
            tile.name = "dirt"
        assert {tile: 1}[tile] == 1

    def test_rejects_unknown_fields_and_flags(self):
        """Test that typos in the table are caught"""
        with pytest.raises(ValidationError):
            TileDescriptor.model_validate({"coordinate": [0, 0], "type_id": 1, "nmae": "stone"})
        with pytest.raises(ValidationError):
            TileDescriptor.model_validate({"coordinate": [0, 0], "type_id": 1, "flags": ["glossy"]})


class TestTileTable:
    """Test the top-level table model"""

    def test_defaults(self):
        """Test that grid, aliases and exclusions are optional"""
        table = TileTable.model_validate({"tiles": [{"coordinate": [0, 0], "type_id": 1, "name": "stone"}]})
        assert table.grid.columns == 16
        assert table.grid.rows == 47
        assert table.aliases == ()
        assert table.excluded == ()

    def test_bad_grid(self):
        """Test that a zero-sized grid is rejected"""
        with pytest.raises(ValidationError):
            TileTable.model_validate({"grid": {"columns": 0, "rows": 47}, "tiles": []})
