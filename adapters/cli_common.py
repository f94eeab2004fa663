"""
Argument and output helpers shared by the CLI adapters.
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional

from domain.models import ExtractionMode, ScrapeReport
from domain.patterns import FilterPattern

# Get logger for this module
logger = logging.getLogger(__name__)


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the filter, extraction and output options on ``parser``."""
    parser.add_argument(
        "-t",
        "--tag",
        default="*",
        help="Tag name to match, '*' or '' for any tag (default: *)",
    )
    parser.add_argument(
        "-a",
        "--attr",
        default="",
        help="Attribute name the element must carry ('*' or '' for any)",
    )
    parser.add_argument(
        "-v",
        "--value",
        default="",
        help="Attribute value to match; without --attr any attribute may match",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in ExtractionMode],
        default=ExtractionMode.TEXT.value,
        help="What to extract from each match (default: text)",
    )
    parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Only extract the match at this position",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "plain"],
        default="json",
        help="json report or the plain concatenated content (default: json)",
    )
    parser.add_argument(
        "-out",
        "--output-file",
        dest="output_file",
        help="Write the output to this file instead of stdout",
    )


def pattern_from_args(args: argparse.Namespace) -> FilterPattern:
    return FilterPattern(args.tag, args.attr, args.value)


def env_int(name: str, default: int) -> int:
    """Read an integer from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


def render_report(report: ScrapeReport, output_format: str) -> str:
    if output_format == "plain":
        return report.content
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def write_output(text: str, output_file: Optional[str]) -> None:
    """Write ``text`` to ``output_file`` or to stdout."""
    if output_file:
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.debug("Writing output to file: %s", output_file)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
        return
    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")
