"""
Core scraping orchestration and browser management.
"""
import logging
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError, async_playwright

from .config import Config
from .errors import NavigationError, classify, error_message
from .extractor import ListingExtractor
from .limiter import RateLimiter
from .models import ListingRecord
from .utils import get_logger


async def scrape_one(browser, url: str, extractor, config: Config, logger: logging.Logger) -> ListingRecord:
    """
    Navigate to one listing in its own browser context and extract it.

    Every failure is turned into a placeholder record; the context is
    closed on all paths.
    """
    context = None
    try:
        context = await browser.new_context(
            user_agent=config.user_agent,
            bypass_csp=True,
        )
        page = await context.new_page()
        try:
            await page.goto(url, timeout=config.navigation_timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(error_message(e)) from e
        data = await extractor.extract(page)
        return ListingRecord.from_extraction(data, url)
    except Exception as e:
        message = error_message(e)
        logger.error(f"Error extracting product information ({classify(e).value}): {message}")
        logger.debug("Extraction failure details", exc_info=True)
        return ListingRecord.failure(url, message)
    finally:
        if context is not None:
            try:
                await context.close()
            except Exception as e:
                logger.warning(f">>> Could not close browser context for {url}: {error_message(e)}")


async def scrape_listings(
    browser,
    urls: List[str],
    extractor,
    config: Config,
    limiter: Optional[RateLimiter] = None,
    logger: Optional[logging.Logger] = None,
    records: Optional[List[ListingRecord]] = None,
) -> List[ListingRecord]:
    """
    Process URLs one by one with an isolated context each.

    Records are appended to ``records`` (a new list when omitted) in input
    order, so a caller holding the list keeps whatever was finished if an
    unexpected error escapes.
    """
    logger = get_logger(logger)
    limiter = limiter or RateLimiter.from_config(config)
    if records is None:
        records = []

    total = len(urls)
    for i, url in enumerate(urls):
        logger.info(f">>> Processing URL {i + 1}/{total}: {url}")
        record = await scrape_one(browser, url, extractor, config, logger)
        records.append(record)
        if record.is_failure:
            logger.warning(f">>> Failed: {record.description}")
        else:
            logger.info(">>> Done")

        delay_ms = await limiter.pause_after(i, total)
        if delay_ms:
            logger.debug(f">>> Waited {delay_ms} ms before next listing")

    return records


async def run_scrape(
    urls: List[str],
    config: Config,
    extractor=None,
    limiter: Optional[RateLimiter] = None,
    logger: Optional[logging.Logger] = None,
    records: Optional[List[ListingRecord]] = None,
) -> List[ListingRecord]:
    """
    Main scraping orchestration function.

    Validates the configuration, owns the browser for the whole run, and
    closes it even when an unexpected error escapes the listing loop.
    """
    logger = get_logger(logger)
    config.validate()
    owns_extractor = extractor is None
    if owns_extractor:
        extractor = ListingExtractor(config, logger=logger)

    logger.info(f">>> Starting to scrape {len(urls)} products...")

    launch_args = ["--disable-blink-features=AutomationControlled"]
    if config.headless:
        launch_args += ["--disable-dev-shm-usage", "--no-sandbox", "--disable-gpu"]

    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=config.headless, args=launch_args)
            logger.info(f">>> Headless mode: {config.headless}")
            try:
                return await scrape_listings(
                    browser, urls, extractor, config,
                    limiter=limiter, logger=logger, records=records,
                )
            finally:
                await browser.close()
    finally:
        if owns_extractor:
            await extractor.aclose()
