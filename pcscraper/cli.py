"""
Command line entry point: resolve URLs, scrape them, report and save.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Config
from .core import run_scrape
from .errors import ConfigError
from .export import ensure_output_dir, save_output
from .models import ListingRecord
from .report import display_summary
from .sources import resolve_urls
from .utils import init_logger


DEFAULT_OUTPUT_PREFIX = "pc_listings"

EPILOG = """Examples:
  pc-scraper -i urls.txt
  pc-scraper -i urls.json -o gaming_pcs
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pc-scraper",
        description="FB Marketplace PC Scraper",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--input", "-i", default=None,
                    help="Path to file containing URLs to scrape")
    ap.add_argument("--output", "-o", default=DEFAULT_OUTPUT_PREFIX,
                    help="Base name for output files (default: pc_listings)")
    return ap


def parse_args(argv: Optional[List[str]] = None):
    """Parse known options; anything unrecognized is returned separately and ignored."""
    args, unknown = build_parser().parse_known_args(argv)
    # "run" is accepted as an optional command word
    unknown = [a for a in unknown if a != "run"]
    return args, unknown


def persist(records: List[ListingRecord], config: Config, prefix: str,
            logger: logging.Logger) -> List[str]:
    output_dir = ensure_output_dir(config.output_dir, config.timestamped_output, logger)
    return save_output(records, output_dir, prefix, logger)


def run(args, config: Config, logger: logging.Logger) -> int:
    urls = resolve_urls(args.input, logger)
    prefix = args.output or DEFAULT_OUTPUT_PREFIX
    records: List[ListingRecord] = []

    try:
        asyncio.run(run_scrape(urls, config, logger=logger, records=records))
    except ConfigError as e:
        logger.error(f"Error in main execution: {e.message}")
        return 1
    except Exception as e:
        logger.error(f"Error in main execution: {e}", exc_info=True)
        if records:
            logger.warning(f">>> Saving {len(records)} partial results")
            persist(records, config, prefix, logger)
        return 1

    display_summary(records, logger)
    paths = persist(records, config, prefix, logger)
    if len(paths) < 2:
        return 1
    logger.info("Results saved to:\n" + "\n".join(f"  - {p}" for p in paths))
    logger.info("Scraping complete!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args, unknown = parse_args(argv)
    config = Config.from_env()
    logger = init_logger(
        console_level=config.log_console,
        file_level=config.log_file,
        log_file=config.log_file_path,
    )
    if unknown:
        logger.debug(f"Ignoring unrecognized arguments: {unknown}")

    logger.info("FB Marketplace PC Scraper")
    try:
        config.validate()
    except ConfigError as e:
        logger.error(f"Error in main execution: {e.message}")
        return 1

    return run(args, config, logger)


if __name__ == "__main__":
    sys.exit(main())
