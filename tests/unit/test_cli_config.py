"""Unit tests for configuration file loading and option building."""

import argparse
import json

import pytest

from office2site.cli.config import build_site_options, load_config_file, merge_configs
from office2site.exceptions import ValidationError
from office2site.options import PptxOptions


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_toml(self, temp_dir) -> None:
        path = temp_dir / "office2site.toml"
        path.write_text('slides_mode = "viewer"\n\n[pptx]\ninclude_notes = false\n', encoding="utf-8")
        assert load_config_file(path) == {"slides_mode": "viewer", "pptx": {"include_notes": False}}

    def test_yaml(self, temp_dir) -> None:
        path = temp_dir / "office2site.yml"
        path.write_text("sidebar_format: json\ndocx:\n  bullet_marker: '*'\n", encoding="utf-8")
        assert load_config_file(path) == {"sidebar_format": "json", "docx": {"bullet_marker": "*"}}

    def test_json(self, temp_dir) -> None:
        path = temp_dir / "office2site.json"
        path.write_text(json.dumps({"base_url": "/handbook/"}), encoding="utf-8")
        assert load_config_file(str(path)) == {"base_url": "/handbook/"}

    def test_pyproject_section(self, temp_dir) -> None:
        path = temp_dir / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.office2site]\noutput_dir = "site"\n', encoding="utf-8")
        assert load_config_file(path) == {"output_dir": "site"}

    def test_pyproject_without_section(self, temp_dir) -> None:
        path = temp_dir / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, temp_dir) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(temp_dir / "absent.toml")

    def test_directory(self, temp_dir) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(temp_dir)

    def test_unsupported_extension(self, temp_dir) -> None:
        path = temp_dir / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name, content",
        [
            ("bad.toml", "slides_mode = "),
            ("bad.yaml", "key: [unclosed"),
            ("bad.json", "{not json"),
        ],
    )
    def test_invalid_content(self, temp_dir, name, content) -> None:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="Invalid"):
            load_config_file(path)

    def test_non_mapping_root(self, temp_dir) -> None:
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="must hold a table"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestMergeConfigs:
    """Tests for merge_configs."""

    def test_override_wins(self) -> None:
        assert merge_configs({"slides_mode": "viewer"}, {"slides_mode": "markdown"}) == {"slides_mode": "markdown"}

    def test_nested_tables_merged(self) -> None:
        merged = merge_configs(
            {"pptx": {"include_notes": False, "body_placeholder_policy": "typed"}},
            {"pptx": {"include_notes": True}},
        )
        assert merged == {"pptx": {"include_notes": True, "body_placeholder_policy": "typed"}}

    def test_inputs_unchanged(self) -> None:
        base = {"a": 1}
        merge_configs(base, {"b": 2})
        assert base == {"a": 1}


@pytest.mark.unit
@pytest.mark.cli
class TestBuildSiteOptions:
    """Tests for build_site_options."""

    def test_empty_config_gives_defaults(self) -> None:
        options = build_site_options({})
        assert options.slides_mode == "markdown"
        assert options.pptx == PptxOptions()

    def test_nested_sections(self, temp_dir) -> None:
        options = build_site_options(
            {
                "input_dir": str(temp_dir),
                "slides_mode": "viewer",
                "pptx": {"body_placeholder_policy": "typed"},
                "docx": {"embed_images": False},
            }
        )
        assert options.input_dir == temp_dir.resolve()
        assert options.slides_mode == "viewer"
        assert options.pptx.body_placeholder_policy == "typed"
        assert options.docx.embed_images is False

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(ValidationError, match="colour"):
            build_site_options({"colour": "blue"})

    def test_unknown_nested_key(self) -> None:
        with pytest.raises(ValidationError, match="pptx"):
            build_site_options({"pptx": {"speaker_notes": True}})

    def test_nested_section_must_be_table(self) -> None:
        with pytest.raises(ValidationError):
            build_site_options({"docx": "yes"})

    def test_invalid_value(self) -> None:
        with pytest.raises(ValidationError):
            build_site_options({"sidebar_format": "yaml"})
