"""Tests for timeline configuration."""

import json

import pytest

from lock_timeline.utils.timeline_config import TimelineConfig


class TestTimelineConfig:
    """Tests for defaults, file loading and saving."""

    def test_defaults(self):
        config = TimelineConfig()
        assert config.row_height == 30
        assert config.zoom_factor == 1.3
        assert config.coarse_grid_interval == 1000
        assert config.fine_grid_interval == 100
        assert config.max_rendered_groups == 1000
        assert config.max_grid_lines == 200
        assert config.detail_min_width == 10

    def test_load_merges_timeline_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "timeline": {"row_height": 24, "unknown_key": 1, "zoom_factor": 0.5},
            "other": {"keep": True},
        }))
        config = TimelineConfig(str(path))
        assert config.row_height == 24
        assert config.zoom_factor == 1.3  # invalid value ignored

    def test_invalid_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken")
        assert TimelineConfig(str(path)).row_height == 30

    def test_save_preserves_other_sections(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"other": {"keep": True}}))

        config = TimelineConfig(str(path))
        config.set("row_height", 40)

        data = json.loads(path.read_text())
        assert data["other"] == {"keep": True}
        assert data["timeline"]["row_height"] == 40
        assert TimelineConfig(str(path)).row_height == 40

    def test_overrides(self):
        config = TimelineConfig(row_height=12)
        assert config.row_height == 12

    @pytest.mark.parametrize("key,value", [
        ("row_height", 0),
        ("row_height", -5),
        ("row_height", "30"),
        ("zoom_factor", 1.0),
        ("max_rendered_groups", True),
    ])
    def test_set_rejects_invalid_values(self, key, value):
        with pytest.raises(ValueError):
            TimelineConfig().set(key, value, persist=False)

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            TimelineConfig().get("nope")

    def test_reset_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        config = TimelineConfig(str(path), row_height=50)
        config.reset_to_defaults()
        assert config.row_height == 30
        assert json.loads(path.read_text())["timeline"]["row_height"] == 30
