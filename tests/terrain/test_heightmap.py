import numpy as np
import pytest

from src.terrain.errors import GridParseError
from src.terrain.heightmap import HeightMap, elevation_of

SAMPLE_MAP = """Sabqponm
abcryxxl
accszExk
acctuvwj
abdefghi
"""


class TestParsing:
    def test_dimensions(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        assert heightmap.width == 8
        assert heightmap.height == 5
        assert heightmap.grid.shape == (5, 8)

    def test_markers(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        assert heightmap.start == (0, 0)
        assert heightmap.end == (5, 2)
        assert heightmap.start_index == 0
        assert heightmap.end_index == 21

    def test_marker_elevations(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        assert heightmap.get_elevation(0, 0) == 0
        assert heightmap.get_elevation(5, 2) == 25
        assert heightmap.get_elevation(2, 0) == 1
        assert heightmap.get_elevation(8, 0) is None

    def test_elevation_of(self):
        assert elevation_of("a") == 0
        assert elevation_of("z") == 25
        assert elevation_of("S") == 0
        assert elevation_of("E") == 25
        with pytest.raises(ValueError):
            elevation_of("A")

    def test_windows_line_endings(self):
        heightmap = HeightMap.from_text("Sbc\r\nabE\r\n\r\n")
        assert heightmap.width == 3
        assert heightmap.height == 2
        assert heightmap.end == (2, 1)

    def test_empty_input(self):
        with pytest.raises(GridParseError):
            HeightMap.from_text("")
        with pytest.raises(GridParseError):
            HeightMap.from_text("\n\n")

    def test_ragged_rows(self):
        with pytest.raises(GridParseError) as exc_info:
            HeightMap.from_text("Sbc\nab\nabE\n")
        assert exc_info.value.line == 2
        assert "line 2" in str(exc_info.value)

    def test_invalid_character(self):
        with pytest.raises(GridParseError) as exc_info:
            HeightMap.from_text("Sb1\nabE\n")
        assert exc_info.value.line == 1
        assert exc_info.value.column == 3

    def test_missing_start(self):
        with pytest.raises(GridParseError, match="start"):
            HeightMap.from_text("abc\nabE\n")

    def test_missing_end(self):
        with pytest.raises(GridParseError, match="end"):
            HeightMap.from_text("Sbc\nabc\n")

    def test_duplicate_markers(self):
        with pytest.raises(GridParseError):
            HeightMap.from_text("SbS\nabE\n")
        with pytest.raises(GridParseError):
            HeightMap.from_text("SbE\nabE\n")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            HeightMap.from_text("?")

    def test_load_text_file(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_text(SAMPLE_MAP)
        heightmap = HeightMap.load_text_file(str(path))
        assert heightmap.end == (5, 2)

    def test_load_text_file_invalid_utf8(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_bytes(b"Sab\xff\nabE\n")
        with pytest.raises(GridParseError):
            HeightMap.load_text_file(str(path))


class TestHeightMap:
    def test_index_round_trip(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        for node in range(heightmap.width * heightmap.height):
            assert heightmap.index_of(*heightmap.position_of(node)) == node

    def test_index_out_of_range(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        with pytest.raises(IndexError):
            heightmap.index_of(8, 0)
        with pytest.raises(IndexError):
            heightmap.position_of(40)

    def test_lowest_cells(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        lowest = heightmap.lowest_cell_indices()
        assert len(lowest) == 6
        assert heightmap.start_index in lowest

    def test_find_cells_by_elevation(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        assert heightmap.find_cells_by_elevation(25) == [(4, 2), (5, 2)]

    def test_set_elevation(self):
        heightmap = HeightMap(3, 3)
        heightmap.set_elevation(1, 1, 7)
        assert heightmap.get_elevation(1, 1) == 7
        with pytest.raises(ValueError):
            heightmap.set_elevation(1, 1, 26)

    def test_adjacency(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        adjacency = heightmap.adjacency()
        assert adjacency.node_count == 40
        assert adjacency.height_of(heightmap.end_index) == 25

    def test_copy_is_independent(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        copy = heightmap.copy()
        copy.set_elevation(1, 0, 5)
        assert heightmap.get_elevation(1, 0) == 0
        assert copy.start == heightmap.start

    def test_dict_round_trip(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        restored = HeightMap.from_dict(heightmap.to_dict())
        assert np.array_equal(restored.grid, heightmap.grid)
        assert restored.start == heightmap.start
        assert restored.end == heightmap.end

    def test_from_dict_shape_mismatch(self):
        data = HeightMap.from_text(SAMPLE_MAP).to_dict()
        data["width"] = 7
        with pytest.raises(ValueError):
            HeightMap.from_dict(data)

    @pytest.mark.parametrize("elevation", [-1, 26, 300])
    def test_from_dict_elevation_out_of_range(self, elevation):
        data = HeightMap.from_text(SAMPLE_MAP).to_dict()
        data["grid"][1][1] = elevation
        with pytest.raises(ValueError):
            HeightMap.from_dict(data)

    def test_from_dict_markers_outside_grid(self):
        data = HeightMap.from_text(SAMPLE_MAP).to_dict()
        data["end"] = [8, 0]
        with pytest.raises(ValueError):
            HeightMap.from_dict(data)

        data = HeightMap.from_text(SAMPLE_MAP).to_dict()
        data["start"] = [0, -1]
        with pytest.raises(ValueError):
            HeightMap.from_dict(data)

    def test_save_and_load(self, tmp_path):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        path = tmp_path / "map.json"
        heightmap.save_to_file(str(path))
        restored = HeightMap.load_from_file(str(path))
        assert str(restored) == str(heightmap)

    def test_str_matches_input(self):
        heightmap = HeightMap.from_text(SAMPLE_MAP)
        assert str(heightmap) == SAMPLE_MAP.rstrip("\n")

    def test_render_path(self):
        heightmap = HeightMap.from_text("Sbc\nfeE\n")
        rendered = heightmap.render([0, 1, 2, 5])
        assert rendered == "S##\nfeE"
