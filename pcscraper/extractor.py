"""
Model-backed extraction of listing fields from a rendered page.

The page HTML is converted to markdown, sent to an OpenAI chat model with a
strict JSON schema, and the returned object is handed back as a dict.
"""
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import html2text
from openai import AsyncOpenAI

from .config import Config
from .errors import ConfigError, ExtractionError
from .utils import get_logger


FIELD_DESCRIPTIONS = {
    # PC specific fields
    "title": "The title of the Facebook Marketplace listing",
    "price": "The current price of the PC, including currency symbol",
    "brand": "The brand of the PC (e.g., Dell, HP, Lenovo, Custom)",
    "model": "The model of the PC if available",
    "cpu": "The CPU/processor in the PC (e.g., Intel i7-12700K, AMD Ryzen 5 5600X)",
    "ram": "The RAM specification (e.g., 16GB DDR4)",
    "storage": "The storage specification (e.g., 1TB SSD, 512GB NVMe + 2TB HDD)",
    # FB Marketplace specific fields
    "availability": "Whether the item is available or sold",
    "quantity": "The quantity available if specified",
    "location": "The location of the seller",
    "description": "Important notes from the description (specs, condition, etc.)",
    "imageUrl": (
        "Absolute URL of the main listing image; when the page shows no image, "
        "repeat the listing URL instead of answering Unknown"
    ),
    "originalUrl": "The original URL of the Facebook Marketplace listing",
}

LISTING_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        name: {"type": "string", "description": desc}
        for name, desc in FIELD_DESCRIPTIONS.items()
    },
    "required": list(FIELD_DESCRIPTIONS),
    "additionalProperties": False,
}

SYSTEM_PROMPT = (
    "You are a sitescraper. You extract the product listing shown on a web page "
    "into JSON that follows the given schema. Use the page content only; when a "
    "field is not present on the page, answer \"Unknown\", except imageUrl which "
    "must always be an absolute URL."
)


def page_to_markdown(html: str, base_url: str = "", max_chars: Optional[int] = None) -> str:
    """Convert rendered HTML to markdown, keeping links and image sources."""
    h = html2text.HTML2Text()
    h.ignore_links = False
    h.ignore_images = False
    h.body_width = 0

    if base_url:
        parsed = urlparse(base_url)
        h.baseurl = f"{parsed.scheme}://{parsed.netloc}"

    markdown = h.handle(html or "")
    if max_chars is not None:
        markdown = markdown[:max_chars]
    return markdown


def build_messages(markdown: str, url: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"Website: {url}\n\n{markdown}"},
    ]


def parse_completion(content: Optional[str]) -> Dict[str, Any]:
    """Decode the model's JSON answer."""
    if not content:
        raise ExtractionError("Model returned an empty response")
    try:
        data = json.loads(content)
    except ValueError as e:
        raise ExtractionError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExtractionError("Model response is not a JSON object")
    return data


class ListingExtractor:
    """Wraps the OpenAI client and turns a Playwright page into listing fields."""

    def __init__(self, config: Config, client: Optional[AsyncOpenAI] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = get_logger(logger)
        if client is None:
            if not config.openai_api_key:
                raise ConfigError("OPENAI_API_KEY environment variable is not set")
            # No client-side retries: a failed listing is recorded, not retried
            client = AsyncOpenAI(
                api_key=config.openai_api_key,
                timeout=config.openai_timeout,
                max_retries=0,
            )
        self.client = client

    async def aclose(self) -> None:
        """Release the HTTP connections held by the OpenAI client."""
        await self.client.close()

    async def complete(self, markdown: str, url: str) -> Dict[str, Any]:
        response = await self.client.chat.completions.create(
            model=self.config.openai_model,
            messages=build_messages(markdown, url),
            temperature=0,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "pc_listing",
                    "strict": True,
                    "schema": LISTING_SCHEMA,
                },
            },
        )
        if not response.choices:
            raise ExtractionError("Model returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "length":
            raise ExtractionError("Model response was truncated")
        refusal = getattr(choice.message, "refusal", None)
        if refusal:
            raise ExtractionError(f"Model refused: {refusal}")
        return parse_completion(choice.message.content)

    async def extract(self, page) -> Dict[str, Any]:
        """Extract listing fields from the page currently loaded in ``page``."""
        url = page.url
        html = await page.content()
        markdown = page_to_markdown(html, url, self.config.max_content_chars)
        self.logger.debug(f"Converted {url} to markdown ({len(markdown)} chars)")
        return await self.complete(markdown, url)
