"""
Console summary of a finished run.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .models import ListingRecord
from .utils import get_logger, parse_price


SAMPLE_SIZE = 3


@dataclass
class ScrapeSummary:
    total: int
    successful: int
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    price_mean: Optional[float] = None
    samples: List[ListingRecord] = field(default_factory=list)

    @property
    def has_prices(self) -> bool:
        return self.price_min is not None


def price_series(records: List[ListingRecord]) -> pd.Series:
    """Numeric prices of successful records; unparseable prices are dropped."""
    prices = pd.Series([parse_price(r.price) for r in records if not r.is_failure], dtype="float64")
    return prices.dropna()


def summarize(records: List[ListingRecord]) -> ScrapeSummary:
    successful = sum(1 for r in records if not r.is_failure)
    summary = ScrapeSummary(
        total=len(records),
        successful=successful,
        samples=list(records[:SAMPLE_SIZE]),
    )
    if successful:
        prices = price_series(records)
        if not prices.empty:
            summary.price_min = float(prices.min())
            summary.price_max = float(prices.max())
            summary.price_mean = float(prices.mean())
    return summary


def display_summary(records: List[ListingRecord], logger: Optional[logging.Logger] = None) -> ScrapeSummary:
    """Log totals, price statistics and the first few listings."""
    logger = get_logger(logger)
    summary = summarize(records)

    logger.info("SCRAPING SUMMARY")
    logger.info(f"Total listings processed: {summary.total}")
    logger.info(f"Successful extractions: {summary.successful}/{summary.total}")

    if summary.has_prices:
        logger.info(f"Price range: ${summary.price_min:.2f} - ${summary.price_max:.2f}")
        logger.info(f"Average price: ${summary.price_mean:.2f}")

    if summary.samples:
        logger.info("SAMPLE LISTINGS")
        for i, p in enumerate(summary.samples, 1):
            logger.info(f"#{i}: {p.title}")
            logger.info(f"    {p.price} | {p.brand} {p.model}")
            logger.info(f"    CPU: {p.cpu} | RAM: {p.ram} | Storage: {p.storage}")
            logger.info(f"    {p.location} | {p.availability}")

    return summary
