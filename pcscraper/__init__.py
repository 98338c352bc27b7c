"""
Facebook Marketplace PC Listing Scraper Package
"""
from .models import ListingRecord
from .config import Config
from .core import run_scrape, scrape_listings
from .sources import resolve_urls, read_urls_from_file, parse_url_document
from .limiter import RateLimiter
from .report import summarize, display_summary
from .export import (
    ensure_output_dir,
    render_csv,
    save_json,
    save_csv,
    save_output
)
from .utils import init_logger, parse_price

__version__ = "1.0.0"

__all__ = [
    "ListingRecord",
    "Config",
    "run_scrape",
    "scrape_listings",
    "resolve_urls",
    "read_urls_from_file",
    "parse_url_document",
    "RateLimiter",
    "summarize",
    "display_summary",
    "ensure_output_dir",
    "render_csv",
    "save_json",
    "save_csv",
    "save_output",
    "init_logger",
    "parse_price"
]
