"""
Products file load/save.
One product per line: id,name,quantity,category
- Malformed lines are skipped with a warning, never surfaced to the engine
- A missing file on load means an empty warehouse
- Saving writes a full snapshot, replacing the previous file
"""
import csv
import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from pydantic import ValidationError

from warehouse.exceptions import StorageError
from warehouse.models import Product
from warehouse.schemas.inventory import ProductRecord

logger = logging.getLogger(__name__)

FIELDS = ("product_id", "name", "quantity", "category")


def parse_products(lines: Iterable[str], source: str = "<input>") -> List[ProductRecord]:
    records = []
    for line_number, row in enumerate(csv.reader(lines), start=1):
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) != len(FIELDS):
            logger.warning(f"{source}:{line_number}: expected {len(FIELDS)} fields, got {len(row)}; skipped")
            continue
        try:
            records.append(ProductRecord(**dict(zip(FIELDS, (cell.strip() for cell in row)))))
        except ValidationError as e:
            logger.warning(f"{source}:{line_number}: invalid product record skipped: {e.errors()[0]['msg']}")
    return records


def load_products(path: Union[str, Path]) -> List[ProductRecord]:
    """Read product records from path."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Products file not found: {path}. Starting with an empty warehouse.")
        return []

    try:
        with open(path, "r", newline="", encoding="utf-8") as f:
            records = parse_products(f, source=str(path))
    except OSError as e:
        logger.error(f"Unable to read products file {path}: {e}")
        raise StorageError(f"Unable to read products file {path}: {e}") from e

    logger.info(f"Loaded {len(records)} product record(s) from {path}")
    return records


def save_products(products: Iterable[Product], path: Union[str, Path]) -> int:
    """Write every product to path. Returns the number of rows written."""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    count = 0
    try:
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            for product in products:
                writer.writerow([product.product_id, product.name, product.quantity, product.category])
                count += 1
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Unable to write products file {path}: {e}")
        raise StorageError(f"Unable to write products file {path}: {e}") from e

    logger.info(f"Saved {count} product(s) to {path}")
    return count
