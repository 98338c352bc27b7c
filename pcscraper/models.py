"""
Data models for the marketplace PC listing scraper.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, List
from urllib.parse import urlparse

from .errors import ExtractionError


UNKNOWN = "Unknown"
FAILED_TITLE = "Extraction Failed"

# Dataclass field name -> serialized (JSON) name
WIRE_NAMES = {
    "image_url": "imageUrl",
    "original_url": "originalUrl",
}


def is_well_formed_url(value: str) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    if not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class ListingRecord:
    """One PC listing extracted from a marketplace page, or its failure placeholder."""

    # Listing info
    title: str
    price: str
    brand: str
    model: str

    # Hardware specs
    cpu: str
    ram: str
    storage: str

    # Marketplace info
    availability: str
    quantity: str
    location: str
    description: str

    # Media and source
    image_url: str
    original_url: str

    @property
    def is_failure(self) -> bool:
        return self.title == FAILED_TITLE

    @classmethod
    def failure(cls, original_url: str, message: str) -> "ListingRecord":
        """Placeholder keeping the output aligned with the input URLs."""
        return cls(
            title=FAILED_TITLE,
            price=UNKNOWN,
            brand=UNKNOWN,
            model=UNKNOWN,
            cpu=UNKNOWN,
            ram=UNKNOWN,
            storage=UNKNOWN,
            availability=UNKNOWN,
            quantity=UNKNOWN,
            location=UNKNOWN,
            description=f"Failed to extract information: {message}",
            image_url="",
            original_url=original_url,
        )

    @classmethod
    def from_extraction(cls, data: Dict[str, Any], original_url: str) -> "ListingRecord":
        """
        Build a record from the model's JSON object.

        The URL we navigated to always wins over whatever the model reported.
        Raises ExtractionError when the object does not match the listing schema.
        """
        if not isinstance(data, dict):
            raise ExtractionError(f"Expected a JSON object, got {type(data).__name__}")

        values = {}
        missing = []
        for f in fields(cls):
            if f.name == "original_url":
                continue
            key = WIRE_NAMES.get(f.name, f.name)
            value = data.get(key)
            if not isinstance(value, str):
                missing.append(key)
                continue
            values[f.name] = value.strip()

        if missing:
            raise ExtractionError(f"Response does not match schema, missing: {', '.join(missing)}")
        if not is_well_formed_url(values["image_url"]):
            raise ExtractionError(f"Invalid imageUrl: {values['image_url']!r}")

        return cls(original_url=original_url, **values)

    def to_dict(self) -> Dict[str, str]:
        return {WIRE_NAMES.get(f.name, f.name): getattr(self, f.name) for f in fields(self)}

    def csv_row(self) -> List[str]:
        return [getattr(self, f.name) for f in fields(self)]
