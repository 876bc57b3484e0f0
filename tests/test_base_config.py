"""Tests for the base-character config loader."""

from pathlib import Path

import pytest
import yaml

from conftest import base_config_dict
from parrotcompose.base_config import base_config_path, load_base_config
from parrotcompose.errors import ConfigError


def _write(tmp_path, content) -> Path:
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(content, f)
    return path


class TestLoadBaseConfig:
    def test_normalizes_fields(self, tmp_path):
        config = load_base_config(_write(tmp_path, base_config_dict()))
        assert config["width"] == 32
        assert config["height"] == 32
        assert config["frame_count"] == 4
        assert config["flip_x"] is False
        assert config["frames_dir"] == tmp_path / "frames"
        assert config["white_frames_dir"] == tmp_path / "white"
        assert config["placements"][0] == [
            {"x": 5, "y": 5, "flip_x": False, "flip_y": False},
        ]

    def test_multiple_placements(self, tmp_path):
        raw = base_config_dict(frame_count=2)
        raw["following_frames"][1] = {
            "multiple": [{"x": 1, "y": 2, "flip_x": True}, {"x": 3, "y": 4}],
        }
        config = load_base_config(_write(tmp_path, raw))
        assert config["placements"][1] == [
            {"x": 1, "y": 2, "flip_x": True, "flip_y": False},
            {"x": 3, "y": 4, "flip_x": False, "flip_y": False},
        ]

    def test_default_flips(self, tmp_path):
        config = load_base_config(_write(tmp_path, base_config_dict(flip_x=True)))
        assert config["flip_x"] is True
        assert config["flip_y"] is False

    def test_path_variables_and_absolute_dirs(self, tmp_path):
        raw = base_config_dict(
            paths={"art": "/data/art"}, frames_dir="${art}/frames",
        )
        del raw["white_frames_dir"]
        config = load_base_config(_write(tmp_path, raw))
        assert config["frames_dir"] == Path("/data/art/frames")
        assert config["white_frames_dir"] is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_base_config(tmp_path / "nope.yaml")

    @pytest.mark.parametrize("field", ["width", "height", "frames", "frames_dir", "following_frames"])
    def test_missing_field(self, tmp_path, field):
        raw = base_config_dict()
        del raw[field]
        with pytest.raises(ConfigError, match=field):
            load_base_config(_write(tmp_path, raw))

    def test_zero_frames(self, tmp_path):
        raw = base_config_dict(frame_count=0)
        with pytest.raises(ConfigError, match="frames"):
            load_base_config(_write(tmp_path, raw))

    def test_descriptor_count_mismatch(self, tmp_path):
        raw = base_config_dict()
        raw["following_frames"].pop()
        with pytest.raises(ConfigError, match="one per frame"):
            load_base_config(_write(tmp_path, raw))

    def test_placement_missing_y(self, tmp_path):
        raw = base_config_dict()
        raw["following_frames"][2] = {"x": 1}
        with pytest.raises(ConfigError, match="Frame 2: missing required field 'y'"):
            load_base_config(_write(tmp_path, raw))

    def test_empty_multiple(self, tmp_path):
        raw = base_config_dict()
        raw["following_frames"][0] = {"multiple": []}
        with pytest.raises(ConfigError, match="non-empty"):
            load_base_config(_write(tmp_path, raw))

    def test_unknown_path_variable(self, tmp_path):
        raw = base_config_dict(frames_dir="${missing}/frames")
        with pytest.raises(ConfigError, match="Unknown path variable"):
            load_base_config(_write(tmp_path, raw))


class TestBaseConfigPath:
    def test_named_character(self, tmp_path):
        assert base_config_path("parrot", tmp_path) == tmp_path / "parrot" / "config.yaml"

    def test_loads_fixture_character(self, parrot_dir):
        config = load_base_config(base_config_path("parrot", parrot_dir.parent))
        assert config["frame_count"] == 4
