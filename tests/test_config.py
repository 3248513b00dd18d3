"""
Unit tests for smart_organizer.config module.

Tests the category table and TOML loading.
"""

from pathlib import Path

import pytest

from smart_organizer.config import (
    Config,
    ConfigError,
    RunOptions,
    load_config,
    normalize_extension,
    parse_categories,
)


class TestCategorize:
    """Tests for Config.categorize."""

    def test_default_categories(self):
        config = Config()
        assert config.category_names == ["Images", "Documents", "Videos", "Music", "Archives"]

    def test_known_extensions(self):
        config = Config()
        assert config.categorize("jpg") == "Images"
        assert config.categorize("pdf") == "Documents"
        assert config.categorize("mp4") == "Videos"
        assert config.categorize("mp3") == "Music"
        assert config.categorize("zip") == "Archives"

    def test_case_insensitive_for_every_default_extension(self):
        config = Config()
        for extensions in config.categories.values():
            for ext in extensions:
                assert config.categorize(ext.upper()) == config.categorize(ext)
                assert config.categorize(ext.upper()) is not None

    def test_unknown_extension(self):
        config = Config()
        assert config.categorize("xyz") is None
        assert config.categorize("") is None

    def test_accepts_leading_dot(self):
        assert Config().categorize(".PNG") == "Images"

    def test_first_category_wins_on_overlap(self):
        config = Config(categories={"First": ["dat"], "Second": ["dat", "bin"]})

        assert config.categorize("dat") == "First"
        assert config.categorize("bin") == "Second"

    def test_user_extensions_are_normalized(self):
        config = Config(categories={"Books": [".EPUB", "Mobi"]})

        assert config.categories == {"Books": ["epub", "mobi"]}
        assert config.categorize("epub") == "Books"


class TestOverlappingExtensions:
    def test_none_in_defaults(self):
        assert Config().overlapping_extensions() == {}

    def test_reports_owners_in_order(self):
        config = Config(categories={"A": ["x", "y"], "B": ["y"], "C": ["y", "z"]})

        assert config.overlapping_extensions() == {"y": ["A", "B", "C"]}


class TestNormalizeExtension:
    def test_strips_dot_and_lowercases(self):
        assert normalize_extension(".JPG") == "jpg"
        assert normalize_extension(" Tar ") == "tar"
        assert normalize_extension("") == ""


class TestRunOptions:
    def test_defaults(self, temp_dir: Path):
        options = RunOptions(path=temp_dir)

        assert options.dry_run is False
        assert options.find_duplicates is False
        assert options.keep_structure is False

    def test_is_immutable(self, temp_dir: Path):
        options = RunOptions(path=temp_dir)

        with pytest.raises(AttributeError):
            options.dry_run = True


class TestParseCategories:
    def test_missing_table_gives_defaults(self):
        assert parse_categories({}) == Config().categories

    def test_rejects_non_table(self):
        with pytest.raises(ConfigError):
            parse_categories({"categories": ["jpg"]})

    def test_rejects_non_string_extensions(self):
        with pytest.raises(ConfigError, match="Images"):
            parse_categories({"categories": {"Images": ["jpg", 3]}})

    @pytest.mark.parametrize("name", ["", "  ", ".", "..", "../out", "a/b", "a\\b"])
    def test_rejects_names_that_leave_the_category_folder(self, name: str):
        with pytest.raises(ConfigError, match="not a valid folder name"):
            parse_categories({"categories": {name: ["jpg"]}})

    def test_accepts_names_with_dots_and_spaces(self):
        parsed = parse_categories({"categories": {"My Photos.old": ["jpg"]}})

        assert parsed == {"My Photos.old": ["jpg"]}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path, capture_output: list, output_callback):
        config = load_config(tmp_path / "config.toml", output=output_callback)

        assert config.categories == Config().categories
        assert any("No config.toml found" in msg for msg in capture_output)

    def test_loads_categories_in_file_order(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_text(
            '[categories]\n'
            'Books = ["epub", "mobi"]\n'
            'Images = ["jpg"]\n'
        )

        config = load_config(path, output=output_callback)

        assert config.category_names == ["Books", "Images"]
        assert config.categorize("MOBI") == "Books"
        assert config.categorize("png") is None
        assert any("Loaded config.toml" in msg for msg in capture_output)

    def test_invalid_toml_uses_defaults(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_text("[categories\nImages = ")

        config = load_config(path, output=output_callback)

        assert config.categories == Config().categories
        assert any("[WARNING]" in msg for msg in capture_output)

    def test_wrong_shape_uses_defaults(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_text('categories = "Images"\n')

        config = load_config(path, output=output_callback)

        assert config.categories == Config().categories
        assert any("has errors" in msg for msg in capture_output)

    def test_non_utf8_file_uses_defaults(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_bytes(b'[categories]\nImages = ["\xff\xfe"]\n')

        config = load_config(path, output=output_callback)

        assert config.categories == Config().categories
        assert any("has errors" in msg for msg in capture_output)

    def test_path_like_category_name_uses_defaults(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_text('[categories]\n"../out" = ["jpg"]\n')

        config = load_config(path, output=output_callback)

        assert config.categories == Config().categories
        assert any("not a valid folder name" in msg for msg in capture_output)

    def test_empty_file_uses_defaults(self, tmp_path: Path, output_callback):
        path = tmp_path / "config.toml"
        path.write_text("")

        config = load_config(path, output=output_callback)

        assert config.categories == Config().categories

    def test_warns_about_overlap(self, tmp_path: Path, capture_output: list, output_callback):
        path = tmp_path / "config.toml"
        path.write_text(
            '[categories]\n'
            'Raw = ["dng"]\n'
            'Images = ["jpg", "dng"]\n'
        )

        config = load_config(path, output=output_callback)

        assert config.categorize("dng") == "Raw"
        assert any("'.dng'" in msg and "files go to Raw" in msg for msg in capture_output)
