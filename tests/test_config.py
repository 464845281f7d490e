"""Tests for wormtype.core.config – settings file and word-count validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from wormtype.core.config import (
    AppConfig,
    InvalidWordCountError,
    default_data_dir,
    parse_word_count,
)


# ---------------------------------------------------------------------------
# parse_word_count
# ---------------------------------------------------------------------------

class TestParseWordCount:
    @pytest.mark.parametrize("text, expected", [("1", 1), ("25", 25), ("1000", 1000), (" 7 ", 7), ("0010", 10)])
    def test_valid(self, text: str, expected: int):
        assert parse_word_count(text) == expected

    @pytest.mark.parametrize("text", ["0", "1001", "9999", "", "abc", "-5", "3.5", "1e3", "²"])
    def test_invalid(self, text: str):
        with pytest.raises(InvalidWordCountError):
            parse_word_count(text)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_word_count("nope")


# ---------------------------------------------------------------------------
# AppConfig defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_paths(self, tmp_path: Path):
        config = AppConfig(data_dir=tmp_path)
        assert config.leaderboard_path == tmp_path / "leaderboard.txt"
        assert config.achievements_path == tmp_path / "achievements.txt"
        assert config.log_path == tmp_path / "wormtype.log"

    def test_default_presets(self):
        assert AppConfig().word_count_presets == (5, 10, 25, 50)

    def test_default_data_dir(self):
        assert AppConfig().data_dir == default_data_dir()

    def test_string_dir_is_expanded(self):
        assert AppConfig(data_dir="~/somewhere").data_dir == Path.home() / "somewhere"

    def test_bad_preset(self):
        with pytest.raises(ValueError):
            AppConfig(word_count_presets=(5, 0))


# ---------------------------------------------------------------------------
# AppConfig.load
# ---------------------------------------------------------------------------

class TestLoad:
    def test_missing_file(self, tmp_path: Path):
        assert AppConfig.load(tmp_path / "config.yaml") == AppConfig()

    def test_overrides(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text(
            yaml.dump({"data_dir": str(tmp_path), "word_count_presets": [3, 30], "log_level": "DEBUG"}),
            encoding="utf-8",
        )
        config = AppConfig.load(f)
        assert config.data_dir == tmp_path
        assert config.word_count_presets == (3, 30)
        assert config.log_level == "DEBUG"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text(yaml.dump({"colour": "pink", "log_file": "x.log"}), encoding="utf-8")
        config = AppConfig.load(f)
        assert config.log_file == "x.log"

    def test_broken_yaml_gives_defaults(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("data_dir: [unclosed", encoding="utf-8")
        assert AppConfig.load(f) == AppConfig()

    def test_empty_file(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("", encoding="utf-8")
        assert AppConfig.load(f) == AppConfig()

    def test_not_a_mapping(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("- 1\n- 2\n", encoding="utf-8")
        assert AppConfig.load(f) == AppConfig()

    @pytest.mark.parametrize(
        "body",
        [
            "word_count_presets: [5000]\n",
            "word_count_presets: 5\n",
            "word_count_presets: [abc]\n",
            "data_dir: null\n",
        ],
    )
    def test_invalid_values_give_defaults(self, tmp_path: Path, body: str):
        f = tmp_path / "config.yaml"
        f.write_text(body, encoding="utf-8")
        assert AppConfig.load(f) == AppConfig()

    def test_non_string_log_level(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("log_level: 10\n", encoding="utf-8")
        config = AppConfig.load(f)
        assert config.log_level == "10"
        assert config.log_level.upper() == "10"

    def test_non_string_file_name(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text(f"data_dir: {tmp_path}\nlog_file: 7\n", encoding="utf-8")
        assert AppConfig.load(f).log_path == tmp_path / "7"

    def test_mixed_type_unknown_keys(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("1: one\nextra: two\nlog_level: DEBUG\n", encoding="utf-8")
        assert AppConfig.load(f).log_level == "DEBUG"
