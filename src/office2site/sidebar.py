#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/sidebar.py
"""VitePress sidebar generation.

The sidebar mirrors the output directory: directories become collapsed
groups, Markdown pages become links, spreadsheets become download links.
It is rebuilt from scratch after every conversion run.

"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from office2site.constants import (
    DOWNLOAD_ICON,
    MARKDOWN_EXTENSION,
    PUBLIC_DIR_NAME,
    SIDEBAR_JSON_FILENAME,
    SIDEBAR_TS_FILENAME,
    SITE_INDEX_FILENAME,
    XLSX_EXTENSION,
    SidebarFormat,
)
from office2site.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

_EXCLUDED_NAMES = frozenset({SIDEBAR_TS_FILENAME, SIDEBAR_JSON_FILENAME, SITE_INDEX_FILENAME})

TS_HEADER = """// Auto-generated by office2site - do not edit by hand.
// Place this in your VitePress config's sidebar field, e.g.:
//
//   import sidebar from './sidebar'
//   export default defineConfig({ themeConfig: { sidebar } })
"""


@dataclass
class SidebarItem:
    """One sidebar entry: a link, or a collapsed group of child items."""

    text: str
    link: Optional[str] = None
    collapsed: Optional[bool] = None
    items: Optional[list[SidebarItem]] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the VitePress representation, leaving out unset keys."""
        data: dict[str, Any] = {"text": self.text}
        if self.link is not None:
            data["link"] = self.link
        if self.collapsed is not None:
            data["collapsed"] = self.collapsed
        if self.items is not None:
            data["items"] = [item.to_dict() for item in self.items]
        return data


@dataclass
class _Entry:
    name: str
    path: Path
    is_dir: bool = field(default=False)


def _sort_key(entry: _Entry) -> tuple[bool, str, str]:
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def build_sidebar(output_dir: str | Path, base_url: str = "/") -> list[SidebarItem]:
    """Build the sidebar structure for an output directory.

    Parameters
    ----------
    output_dir : str or Path
        Root of the generated site content
    base_url : str, default "/"
        Prefix for every link

    Returns
    -------
    list of SidebarItem
        Top-level items: directories first, then files, each group ordered by
        name (case-insensitive, ties broken by exact name)

    Examples
    --------
    An output tree holding ``a.md`` and ``sub/b.md`` gives::

        [{"text": "a", "link": "/a"},
         {"text": "sub", "collapsed": True, "items": [{"text": "b", "link": "/sub/b"}]}]

    """
    if not base_url.endswith("/"):
        base_url += "/"
    return _build_items(Path(output_dir), base_url, is_root=True)


def _build_items(directory: Path, url_base: str, is_root: bool = False) -> list[SidebarItem]:
    entries = []
    for path in directory.iterdir():
        if path.name in _EXCLUDED_NAMES:
            continue
        if is_root and path.name == PUBLIC_DIR_NAME and path.is_dir():
            continue
        entries.append(_Entry(name=path.name, path=path, is_dir=path.is_dir()))

    items: list[SidebarItem] = []
    for entry in sorted(entries, key=_sort_key):
        url_path = f"{url_base}{entry.name}"
        if entry.is_dir:
            items.append(
                SidebarItem(text=entry.name, collapsed=True, items=_build_items(entry.path, url_path + "/"))
            )
        elif entry.name.endswith(MARKDOWN_EXTENSION):
            stem = entry.name[: -len(MARKDOWN_EXTENSION)]
            items.append(SidebarItem(text=stem, link=url_path[: -len(MARKDOWN_EXTENSION)]))
        elif entry.name.endswith(XLSX_EXTENSION):
            stem = entry.name[: -len(XLSX_EXTENSION)]
            items.append(SidebarItem(text=f"{DOWNLOAD_ICON} {stem}", link=url_path))
        else:
            logger.debug(f"Sidebar: ignoring {entry.path}")
    return items


def render_sidebar(items: list[SidebarItem], sidebar_format: SidebarFormat = "ts") -> str:
    """Serialize sidebar items as a TypeScript module or as JSON."""
    payload = json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
    if sidebar_format == "json":
        return payload + "\n"
    return f"{TS_HEADER}\nexport default {payload} as const;\n"


def sidebar_filename(sidebar_format: SidebarFormat) -> str:
    return SIDEBAR_JSON_FILENAME if sidebar_format == "json" else SIDEBAR_TS_FILENAME


def write_sidebar(output_dir: str | Path, sidebar_format: SidebarFormat = "ts", base_url: str = "/") -> Path:
    """Build and write the sidebar file at the output root.

    Returns
    -------
    Path
        The written file

    Raises
    ------
    OutputWriteError
        If the file cannot be written.

    """
    output_dir = Path(output_dir)
    target = output_dir / sidebar_filename(sidebar_format)
    content = render_sidebar(build_sidebar(output_dir, base_url), sidebar_format)
    try:
        target.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputWriteError(str(target), f"Could not write sidebar: {e}", original_error=e) from e
    logger.info(f"Sidebar config written to {target}")
    return target
