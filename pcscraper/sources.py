"""
Resolution of the target URL list from an input file or built-in defaults.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import error_message
from .utils import get_logger


# Example Facebook Marketplace URLs for PCs
DEFAULT_URLS = [
    "https://www.facebook.com/marketplace/item/3205154652960339/",
    "https://www.facebook.com/marketplace/item/664792412773207/",
    "https://www.facebook.com/marketplace/item/3856292544625767/",
]

KIND_JSON_ARRAY = "json-array"
KIND_JSON_OBJECT = "json-object"
KIND_TEXT = "text"
KIND_EMPTY = "empty"


@dataclass(frozen=True)
class UrlParseResult:
    """Outcome of interpreting an input document: how it was read and what it held."""
    kind: str
    urls: List[str] = field(default_factory=list)


def parse_text_lines(content: str) -> List[str]:
    """One URL per line; blanks and lines not starting with http are skipped."""
    urls = []
    for line in content.splitlines():
        line = line.strip()
        if line and line.startswith("http"):
            urls.append(line)
    return urls


def only_strings(items: list) -> List[str]:
    """Drop null, numeric and nested entries from a JSON URL list."""
    return [u.strip() for u in items if isinstance(u, str) and u.strip()]


def parse_url_document(content: str) -> UrlParseResult:
    """
    Interpret input file contents.

    JSON is tried first: the string entries of an array, or of an object's
    ``urls`` array, are kept. Content that is not JSON is read as plain text.
    """
    content = content.lstrip("\ufeff")
    try:
        data = json.loads(content)
    except ValueError:
        urls = parse_text_lines(content)
        return UrlParseResult(KIND_TEXT if urls else KIND_EMPTY, urls)

    if isinstance(data, list):
        urls = only_strings(data)
        return UrlParseResult(KIND_JSON_ARRAY if urls else KIND_EMPTY, urls)
    if isinstance(data, dict) and isinstance(data.get("urls"), list):
        urls = only_strings(data["urls"])
        return UrlParseResult(KIND_JSON_OBJECT if urls else KIND_EMPTY, urls)
    return UrlParseResult(KIND_EMPTY)


def read_urls_from_file(path: str, logger: Optional[logging.Logger] = None) -> List[str]:
    """Read URLs from a file; read and format errors are logged and yield []."""
    logger = get_logger(logger)
    try:
        with open(path, "r", encoding="utf-8-sig") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading URLs file: {error_message(e)}")
        return []

    result = parse_url_document(content)
    if result.kind == KIND_EMPTY:
        logger.error("Error reading URLs file: Could not parse input file format")
        return []

    logger.debug(f"Parsed {len(result.urls)} URLs from {path} as {result.kind}")
    return result.urls


def resolve_urls(path: Optional[str] = None, logger: Optional[logging.Logger] = None) -> List[str]:
    """Return the URLs to scrape, falling back to DEFAULT_URLS when none are found."""
    logger = get_logger(logger)
    if not path:
        logger.info("No input file provided. Using example URLs.")
        return list(DEFAULT_URLS)

    logger.info(f"Reading URLs from {path}...")
    urls = read_urls_from_file(path, logger)
    if not urls:
        logger.warning("No valid URLs found in input file. Using example URLs.")
        return list(DEFAULT_URLS)

    logger.info(f"Found {len(urls)} URLs to process")
    return urls
