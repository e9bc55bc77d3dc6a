#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser for the office2site command line.

Option help texts come from the ``help`` metadata of the option dataclasses,
so the CLI and the Python API describe settings the same way.
"""

from __future__ import annotations

import argparse
from dataclasses import fields
from typing import Any

from office2site import __version__
from office2site.constants import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR
from office2site.options import PptxOptions, SiteOptions


def _field_help(options_class: type, name: str) -> str:
    for f in fields(options_class):
        if f.name == name:
            return f.metadata.get("help", "")
    raise KeyError(name)


def _field_choices(options_class: type, name: str) -> Any:
    for f in fields(options_class):
        if f.name == name:
            return f.metadata.get("choices")
    raise KeyError(name)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Option arguments default to None so that values from a config file
    apply unless the flag is given on the command line.
    """
    parser = argparse.ArgumentParser(
        prog="office2site",
        description="Convert .docx/.pptx documents into Markdown pages for a VitePress site, "
        "copy .xlsx files as downloads and generate the sidebar index.",
    )

    parser.add_argument(
        "input_dir",
        nargs="?",
        default=None,
        help=f"Directory holding the source documents (default: {DEFAULT_INPUT_DIR})",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help=f"VitePress source directory to write into (default: {DEFAULT_OUTPUT_DIR})",
    )

    site_group = parser.add_argument_group("site options")
    site_group.add_argument(
        "--slides-mode",
        choices=_field_choices(SiteOptions, "slides_mode"),
        default=None,
        help=_field_help(SiteOptions, "slides_mode"),
    )
    site_group.add_argument("--base-url", default=None, metavar="URL", help=_field_help(SiteOptions, "base_url"))
    site_group.add_argument(
        "--sidebar-format",
        choices=_field_choices(SiteOptions, "sidebar_format"),
        default=None,
        help=_field_help(SiteOptions, "sidebar_format"),
    )

    pptx_group = parser.add_argument_group("slide deck options")
    pptx_group.add_argument(
        "--body-placeholders",
        dest="body_placeholder_policy",
        choices=_field_choices(PptxOptions, "body_placeholder_policy"),
        default=None,
        help=_field_help(PptxOptions, "body_placeholder_policy"),
    )
    pptx_group.add_argument(
        "--no-notes",
        dest="include_notes",
        action="store_const",
        const=False,
        default=None,
        help="Leave speaker notes out of the generated pages",
    )
    pptx_group.add_argument(
        "--inherit-positions",
        dest="inherit_placeholder_positions",
        action="store_const",
        const=True,
        default=None,
        help=_field_help(PptxOptions, "inherit_placeholder_positions"),
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="Load settings from a TOML, YAML or JSON file (also read from OFFICE2SITE_CONFIG)",
    )
    parser.add_argument(
        "--no-rich",
        dest="rich",
        action="store_false",
        help="Print plain text instead of rich formatted output",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps, logger names and per-file timing",
    )

    return parser
