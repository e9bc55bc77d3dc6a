#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for office2site.

Usage::

    office2site [input_dir] [output_dir] [options]

Exit status is 0 after a completed run, whatever the number of per-file
failures, and 1 when the input directory is missing or the run aborts.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any

from office2site.cli.builder import create_parser
from office2site.cli.config import build_site_options, load_config_file, merge_configs
from office2site.cli.progress import SummaryRenderer
from office2site.exceptions import InputDirectoryNotFoundError, Office2SiteError
from office2site.logging_utils import configure_logging, resolve_level
from office2site.site import convert_tree

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "OFFICE2SITE_CONFIG"

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Configure logging from ``--log-level``, ``--verbose``, ``--trace`` and ``--log-file``."""
    level = resolve_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _cli_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Collect the settings given explicitly on the command line."""
    overrides: dict[str, Any] = {}
    for name in ("input_dir", "output_dir", "slides_mode", "base_url", "sidebar_format"):
        value = getattr(parsed_args, name)
        if value is not None:
            overrides[name] = value

    pptx: dict[str, Any] = {}
    for name in ("body_placeholder_policy", "include_notes", "inherit_placeholder_positions"):
        value = getattr(parsed_args, name)
        if value is not None:
            pptx[name] = value
    if pptx:
        overrides["pptx"] = pptx
    return overrides


def main(args: list[str] | None = None) -> int:
    """Run the converter; return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.config:
        env_config = os.environ.get(CONFIG_ENV_VAR)
        if env_config:
            parsed_args.config = env_config

    _setup_logging_level(parsed_args)

    try:
        config = load_config_file(parsed_args.config) if parsed_args.config else {}
        options = build_site_options(merge_configs(config, _cli_overrides(parsed_args)))
    except (argparse.ArgumentTypeError, Office2SiteError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    renderer = SummaryRenderer(use_rich=parsed_args.rich)
    try:
        report = convert_tree(options, on_file=renderer.render_file_status)
    except InputDirectoryNotFoundError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        logger.exception(f"Conversion aborted: {e}")
        return EXIT_ERROR

    renderer.render_conversion_summary(report)
    return EXIT_SUCCESS


__all__ = ["main", "create_parser"]
