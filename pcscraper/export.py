"""
Export utilities: output directory, JSON and CSV artifacts.
"""
import json
import logging
import os
from typing import List, Optional

from .models import ListingRecord
from .utils import get_logger, now_stamp


CSV_HEADERS = [
    "Title",
    "Price",
    "Brand",
    "Model",
    "CPU",
    "RAM",
    "Storage",
    "Availability",
    "Quantity",
    "Location",
    "Description",
    "Image URL",
    "Original URL",
]


def ensure_output_dir(base_dir: str = "output", timestamped: bool = True,
                      logger: Optional[logging.Logger] = None) -> str:
    """Create the output directory, optionally with a timestamp subfolder."""
    logger = get_logger(logger)
    output_dir = os.path.join(base_dir, now_stamp()) if timestamped else base_dir
    if not os.path.isdir(output_dir):
        os.makedirs(output_dir, exist_ok=True)
        logger.info(f">>> Created output directory: {output_dir}")
    return output_dir


def csv_cell(value: Optional[str]) -> str:
    """Quote a non-empty value, doubling embedded quotes; empty stays bare."""
    if not value:
        return ""
    return '"' + value.replace('"', '""') + '"'


def render_csv(records: List[ListingRecord]) -> str:
    lines = [",".join(CSV_HEADERS)]
    for record in records:
        lines.append(",".join(csv_cell(v) for v in record.csv_row()))
    return "\n".join(lines)


def save_json(records: List[ListingRecord], output_dir: str,
              filename: str = "pc_listings.json") -> str:
    """Save records to an indented JSON file; returns the path."""
    full_path = os.path.join(output_dir, filename)
    with open(full_path, "w", encoding="utf-8") as fh:
        json.dump([r.to_dict() for r in records], fh, indent=2, ensure_ascii=False)
    return full_path


def save_csv(records: List[ListingRecord], output_dir: str,
             filename: str = "pc_listings.csv") -> str:
    """Save records to the 13-column CSV file; returns the path."""
    full_path = os.path.join(output_dir, filename)
    with open(full_path, "w", encoding="utf-8", newline="") as fh:
        fh.write(render_csv(records))
    return full_path


def save_output(records: List[ListingRecord], output_dir: str, prefix: str = "pc_listings",
                logger: Optional[logging.Logger] = None) -> List[str]:
    """Write both artifacts; a failure writing one does not prevent the other."""
    logger = get_logger(logger)
    saved = []
    for writer, ext in ((save_json, "json"), (save_csv, "csv")):
        try:
            path = writer(records, output_dir, f"{prefix}.{ext}")
        except OSError as e:
            logger.error(f">>> Could not write {prefix}.{ext}: {e}")
            continue
        logger.info(f">>> Saved {len(records)} rows to {path}")
        saved.append(path)
    return saved
