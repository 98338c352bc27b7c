"""
Collect Marketplace listing links from a collection or search page.

The output file ({"urls": [...]}) can be fed straight back to the scraper
with --input.
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Iterable, List, Optional

from playwright.async_api import async_playwright

from .config import Config
from .utils import get_logger, init_logger


LISTING_LINK_MARKER = "facebook.com/marketplace/item/"


def filter_listing_links(hrefs: Iterable[Optional[str]]) -> List[str]:
    """Keep Marketplace item links, dropping duplicates but keeping first-seen order."""
    seen = set()
    links = []
    for href in hrefs:
        if not href or LISTING_LINK_MARKER not in href:
            continue
        if href not in seen:
            seen.add(href)
            links.append(href)
    return links


def format_links(links: List[str]) -> str:
    """Quoted, comma separated, one per line."""
    return ",\n".join(f'"{link}"' for link in links)


async def collect_listing_links(page) -> List[str]:
    """Read every anchor href on the loaded page and return the listing links."""
    anchors = page.locator("a[href*='/marketplace/item/']")
    count = await anchors.count()
    hrefs = []
    for i in range(count):
        # Resolve relative hrefs through the DOM property, not the attribute
        hrefs.append(await anchors.nth(i).evaluate("a => a.href"))
    return filter_listing_links(hrefs)


async def run_collect(url: str, config: Config, logger: Optional[logging.Logger] = None) -> List[str]:
    logger = get_logger(logger)
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.headless)
        try:
            context = await browser.new_context(user_agent=config.user_agent, bypass_csp=True)
            try:
                page = await context.new_page()
                logger.info(f">>> Opening collection page: {url}")
                await page.goto(url, timeout=config.navigation_timeout_ms, wait_until="domcontentloaded")
                links = await collect_listing_links(page)
            finally:
                await context.close()
        finally:
            await browser.close()
    logger.info(f">>> Found {len(links)} unique marketplace listings.")
    return links


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Collect Facebook Marketplace listing links from a page")
    ap.add_argument("--url", required=True, help="Collection or search page to read links from")
    ap.add_argument("--output", "-o", default="", help="Write {\"urls\": [...]} JSON to this file")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = Config.from_env()
    logger = init_logger(console_level=config.log_console, file_level=config.log_file,
                         log_file=config.log_file_path)

    try:
        links = asyncio.run(run_collect(args.url, config, logger))
    except Exception as e:
        logger.error(f"Error collecting links: {e}", exc_info=True)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            json.dump({"urls": links}, fh, indent=2)
        logger.info(f">>> Saved {len(links)} links to {args.output}")
    else:
        print("Marketplace Listing Links:")
        print(format_links(links))
    return 0


if __name__ == "__main__":
    sys.exit(main())
