"""
Parse council crossing-times HTML into JSON.

    python parse_tides.py sourcedata/09-25.html   # one month -> data/tides-2025-09.json
    python parse_tides.py sourcedata/             # every month -> data/tides.json
"""

import argparse, logging, os, sys

import config
from logging_config import setup_logging
from services.aggregate import build_combined_dataset, build_month_dataset, write_dataset
from services.errors import TideDataError
from services.sun import SolarEnricher

logger = logging.getLogger("parse_tides")


def create_parser():
    parser = argparse.ArgumentParser(
        prog="parse-tides",
        description="Extract Holy Island safe crossing times from council HTML tables.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=config.TIDES_DEFAULT_SOURCE,
        help=f"MM-YY.html file or a folder of them (default: {config.TIDES_DEFAULT_SOURCE})",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help=f"Where the JSON is written (default: {config.output_dir()})",
    )
    return parser


def main(argv=None, enricher=None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging()

    if not os.path.exists(args.source):
        logger.error(f"Path not found: {args.source}")
        return 1

    out_dir = args.output_dir or config.output_dir()#same folder the app reads from
    enricher = enricher or SolarEnricher()
    try:
        if os.path.isdir(args.source):
            dataset = build_combined_dataset(args.source, enricher)
            output = os.path.join(out_dir, config.TIDES_COMBINED_FILE)
        else:
            context, dataset = build_month_dataset(args.source, enricher)
            output = os.path.join(out_dir, context.output_name)
        write_dataset(dataset, output)
    except (TideDataError, OSError, ValueError) as e:
        logger.error(f"Script failed: {e}")
        return 1

    logger.info(f"Output: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
