"""Unit tests for VitePress sidebar generation."""

import json

import pytest

from office2site.exceptions import OutputWriteError
from office2site.sidebar import (
    TS_HEADER,
    SidebarItem,
    build_sidebar,
    render_sidebar,
    sidebar_filename,
    write_sidebar,
)


def _touch(root, *names):
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x", encoding="utf-8")


def _dicts(items):
    return [item.to_dict() for item in items]


@pytest.mark.unit
class TestBuildSidebar:
    """Tests for the sidebar structure."""

    def test_pages_and_groups(self, temp_dir) -> None:
        _touch(temp_dir, "a.md", "sub/b.md")
        assert _dicts(build_sidebar(temp_dir)) == [
            {"text": "sub", "collapsed": True, "items": [{"text": "b", "link": "/sub/b"}]},
            {"text": "a", "link": "/a"},
        ]

    def test_spreadsheet_download(self, temp_dir) -> None:
        _touch(temp_dir, "data/Forecast 2024.xlsx")
        group = build_sidebar(temp_dir)[0]
        assert group.items[0].to_dict() == {"text": "\U0001f4e5 Forecast 2024", "link": "/data/Forecast 2024.xlsx"}

    def test_directories_first_then_case_insensitive_names(self, temp_dir) -> None:
        _touch(temp_dir, "B.md", "a.md", "Z/x.md", "b/y.md", "C.md")
        assert [item.text for item in build_sidebar(temp_dir)] == ["b", "Z", "a", "B", "C"]

    def test_generated_files_excluded_at_every_level(self, temp_dir) -> None:
        _touch(temp_dir, "index.md", "sidebar.ts", "sidebar.json", "page.md", "sub/index.md", "sub/other.md")
        assert _dicts(build_sidebar(temp_dir)) == [
            {"text": "sub", "collapsed": True, "items": [{"text": "other", "link": "/sub/other"}]},
            {"text": "page", "link": "/page"},
        ]

    def test_public_excluded_only_at_root(self, temp_dir) -> None:
        _touch(temp_dir, "public/slides/deck.html", "guides/public/note.md")
        assert _dicts(build_sidebar(temp_dir)) == [
            {
                "text": "guides",
                "collapsed": True,
                "items": [
                    {"text": "public", "collapsed": True, "items": [{"text": "note", "link": "/guides/public/note"}]}
                ],
            }
        ]

    def test_other_files_ignored(self, temp_dir) -> None:
        _touch(temp_dir, "image.png", "notes.txt", "page.md")
        assert [item.text for item in build_sidebar(temp_dir)] == ["page"]

    def test_empty_directory_group(self, temp_dir) -> None:
        (temp_dir / "empty").mkdir()
        assert _dicts(build_sidebar(temp_dir)) == [{"text": "empty", "collapsed": True, "items": []}]

    def test_base_url_prefix(self, temp_dir) -> None:
        _touch(temp_dir, "sub/b.md")
        assert build_sidebar(temp_dir, base_url="/docs").pop().items[0].link == "/docs/sub/b"


@pytest.mark.unit
class TestRenderSidebar:
    """Tests for serialization."""

    def test_json(self) -> None:
        rendered = render_sidebar([SidebarItem("a", link="/a")], "json")
        assert rendered.endswith("\n")
        assert json.loads(rendered) == [{"text": "a", "link": "/a"}]

    def test_typescript_module(self) -> None:
        rendered = render_sidebar([SidebarItem("g", collapsed=True, items=[])], "ts")
        assert rendered.startswith(TS_HEADER)
        assert rendered.startswith("// Auto-generated")
        assert "export default [" in rendered
        assert rendered.endswith("] as const;\n")

    def test_empty_typescript_module(self) -> None:
        assert render_sidebar([], "ts").endswith("\nexport default [] as const;\n")

    def test_non_ascii_kept(self) -> None:
        assert "Übersicht" in render_sidebar([SidebarItem("Übersicht", link="/Übersicht")], "json")

    def test_filenames(self) -> None:
        assert sidebar_filename("ts") == "sidebar.ts"
        assert sidebar_filename("json") == "sidebar.json"


@pytest.mark.unit
class TestWriteSidebar:
    """Tests for writing the sidebar file."""

    def test_write_json(self, temp_dir) -> None:
        _touch(temp_dir, "a.md")
        path = write_sidebar(temp_dir, "json")
        assert path == temp_dir / "sidebar.json"
        assert json.loads(path.read_text(encoding="utf-8")) == [{"text": "a", "link": "/a"}]

    def test_rewrite_does_not_list_itself(self, temp_dir) -> None:
        _touch(temp_dir, "a.md")
        first = write_sidebar(temp_dir).read_bytes()
        second = write_sidebar(temp_dir).read_bytes()
        assert first == second

    def test_unwritable_target(self, temp_dir) -> None:
        (temp_dir / "sidebar.ts").mkdir()
        with pytest.raises(OutputWriteError):
            write_sidebar(temp_dir)
