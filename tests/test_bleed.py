"""
Tests for transparent-texel bleeding and black keying
"""
import numpy as np

from swatchsmith.texturing.bleed import bleed_transparent_texels, key_black_to_transparent


class TestBleed:
    """Color bleeding into fully transparent texels"""

    def test_single_texel_spreads(self):
        """Test that one opaque texel colors the whole tile"""
        tile = np.zeros((8, 8, 4), dtype=np.uint8)
        tile[3, 4] = (200, 50, 25, 255)
        result = bleed_transparent_texels(tile)
        assert (result[..., :3] == np.array([200, 50, 25], dtype=np.uint8)).all()
        assert np.array_equal(result[..., 3], tile[..., 3])

    def test_neighbour_gets_color(self):
        """Test that a transparent neighbour of an opaque texel takes its color"""
        tile = np.zeros((4, 4, 4), dtype=np.uint8)
        tile[0, 0] = (10, 20, 30, 255)
        result = bleed_transparent_texels(tile, max_passes=1)
        assert tuple(result[1, 1]) == (10, 20, 30, 0)
        assert tuple(result[3, 3]) == (0, 0, 0, 0)

    def test_mean_of_neighbours(self):
        """Test averaging when several covered texels touch one hole"""
        tile = np.zeros((3, 3, 4), dtype=np.uint8)
        tile[0, 1] = (100, 0, 0, 255)
        tile[2, 1] = (200, 0, 0, 255)
        result = bleed_transparent_texels(tile, max_passes=1)
        assert result[1, 1, 0] == 150

    def test_alpha_never_changes(self):
        """Test that coverage is preserved exactly"""
        rng = np.random.default_rng(4)
        tile = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        tile[rng.random((16, 16)) < 0.5, 3] = 0
        result = bleed_transparent_texels(tile)
        assert np.array_equal(result[..., 3], tile[..., 3])
        covered = tile[..., 3] > 0
        assert np.array_equal(result[covered], tile[covered])

    def test_fully_transparent_unchanged(self):
        """Test that a tile with nothing to bleed from is returned as is"""
        tile = np.zeros((16, 16, 4), dtype=np.uint8)
        tile[..., 0] = 99
        result = bleed_transparent_texels(tile)
        assert np.array_equal(result, tile)
        assert result is not tile

    def test_opaque_unchanged(self):
        """Test that an opaque tile is returned as is"""
        tile = np.full((16, 16, 4), 255, dtype=np.uint8)
        assert np.array_equal(bleed_transparent_texels(tile), tile)


class TestBlackKeying:
    """Black treated as transparent"""

    def test_black_becomes_transparent(self):
        """Test that only pure black loses coverage"""
        tile = np.full((2, 2, 4), 255, dtype=np.uint8)
        tile[0, 0, :3] = 0
        tile[0, 1, :3] = (0, 0, 1)
        result = key_black_to_transparent(tile)
        assert result[0, 0, 3] == 0
        assert result[0, 1, 3] == 255
        assert tile[0, 0, 3] == 255
