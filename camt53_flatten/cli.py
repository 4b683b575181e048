#!/usr/bin/env python3

from __future__ import annotations

import argparse
import glob
import logging
import sys
from collections.abc import Sequence

import yaml
from lxml import etree

from camt53_flatten.camt import parse_file
from camt53_flatten.config import FORMATS, Config
from camt53_flatten.errors import ExtractionError
from camt53_flatten.exporters import write_csv
from camt53_flatten.models import FlatEntry

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.xml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="camt53-flatten",
        description="Export all transactions of CAMT.053 statements into a csv file.",
    )
    parser.add_argument(
        "-o", "--output", metavar="FILE", help="output file (default: output.csv)"
    )
    parser.add_argument("-c", "--config", metavar="FILE", help="YAML configuration")
    parser.add_argument("-f", "--format", choices=FORMATS, help="output format")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "input_files",
        nargs="*",
        metavar="FILE",
        help=f"CAMT.053 files or glob patterns (default: {DEFAULT_PATTERN})",
    )
    return parser


def expand_inputs(patterns: Sequence[str]) -> list[str]:
    paths = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        if not matches:
            logger.warning(f"No file matches {pattern!r}")
        paths.extend(matches)
    return paths


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.from_yaml(args.config) if args.config else Config()
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        logger.error(f"Invalid configuration {args.config}: {e}")
        return 1
    if args.output:
        config.output = args.output
    if args.format:
        config.format = args.format

    flat_entries: list[FlatEntry] = []
    for path in expand_inputs(args.input_files or [DEFAULT_PATTERN]):
        try:
            flat_entries.extend(parse_file(path))
        except (ExtractionError, etree.XMLSyntaxError, OSError) as e:
            logger.error(f"Failed to process {path}: {e}")
            return 1

    try:
        if config.format == "beancount":
            config.beancount_exporter().write(config.output, flat_entries)
        else:
            write_csv(config.output, flat_entries, delimiter=config.delimiter)
    except (ExtractionError, OSError) as e:
        logger.error(f"Failed to write {config.output}: {e}")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
