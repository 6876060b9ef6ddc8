import json
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional
import pandas as pd
import requests
from pydantic import ValidationError

from . import settings
from . import utils
from .schemas import DiscountedItem, InventoryItem, InventoryReport

logger = logging.getLogger(__name__)


class InventoryLoadError(Exception):
    """The inventory source could not be read or contained invalid rows."""


def sample_inventory(today: Optional[datetime] = None) -> list[InventoryItem]:
    """The built-in inventory batch, with restock dates relative to `today`."""
    today = today or datetime.now()

    def days_ago(days: int) -> datetime:
        return today - timedelta(days=days)

    return [
        InventoryItem(
            item_id=101,
            name="Laptop Adapter",
            price=Decimal("49.99"),
            quantity=50,
            category="Accessories",
            last_restock_date=days_ago(10),
        ),
        InventoryItem(
            item_id=102,
            name="Wireless Mouse",
            price=Decimal("19.99"),
            quantity=120,
            category="Peripherals",
            last_restock_date=days_ago(150),
        ),  # Outdated
        InventoryItem(
            item_id=103,
            name="USB-C Hub",
            price=Decimal("75.00"),
            quantity=30,
            category="Accessories",
            last_restock_date=days_ago(50),
        ),
        InventoryItem(
            item_id=104,
            name="Adjustable Stand",
            price=None,
            quantity=80,
            category="Ergonomics",
            last_restock_date=None,
        ),  # No price, no restock date
        InventoryItem(
            item_id=105,
            name="Monitor Cable",
            price=Decimal("9.99"),
            quantity=200,
            category="Peripherals",
            last_restock_date=days_ago(30),
        ),
        InventoryItem(
            item_id=106,
            name="Apple Pencil",
            price=Decimal("99.00"),
            quantity=40,
            category="Accessories",
            last_restock_date=days_ago(100),
        ),
        InventoryItem(
            item_id=107,
            name="Gaming Headset",
            price=Decimal("150.00"),
            quantity=60,
            category="Peripherals",
            last_restock_date=days_ago(200),
        ),  # Outdated
        InventoryItem(
            item_id=108,
            name="Projector",
            price=Decimal("450.00"),
            quantity=10,
            category="Displays",
            last_restock_date=days_ago(5),
        ),
    ]


def load_inventory(path: Optional[Path] = None) -> list[InventoryItem]:
    """
    Loads the inventory batch from a CSV file (headers match the InventoryItem aliases).
    Falls back to the built-in sample batch when the file does not exist.
    """
    path = Path(path) if path else settings.INVENTORY_FILE
    if not path.exists():
        logger.info(f"No inventory file at {path}. Using the built-in sample batch.")
        return sample_inventory()

    df = utils.load_csv(path)
    if df is None:
        raise InventoryLoadError(f"Could not read inventory file {path}")

    # Empty cells become None so optional fields validate as missing.
    df = df.astype(object).where(pd.notna(df), None)

    items = []
    # Line 1 is the header, so data rows start at line 2.
    for line_number, row in enumerate(df.to_dict("records"), start=2):
        record = {str(k).strip(): v for k, v in row.items()}
        try:
            items.append(InventoryItem(**record))
        except ValidationError as e:
            raise InventoryLoadError(
                f"Invalid inventory row at line {line_number} of {path.name}: {e}"
            ) from e

    # Item IDs must be unique within a batch.
    seen_ids = set()
    for item in items:
        if item.item_id in seen_ids:
            raise InventoryLoadError(
                f"Duplicate Item ID {item.item_id} in {path.name}"
            )
        seen_ids.add(item.item_id)

    logger.info(f"✅ Loaded {len(items)} items from {path.name}.")
    return items


def save_outputs(
    report: InventoryReport,
    base_name: str = settings.REPORT_FILENAME_BASE,
    output_dir: Optional[Path] = None,
    save_json: Optional[bool] = None,
) -> list[Path]:
    """Saves the discounted items to CSV and conditionally the full report to JSON, with dated filenames."""
    output_dir = output_dir or settings.OUTPUT_DIR
    save_json = settings.SAVE_JSON_OUTPUT if save_json is None else save_json
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = output_dir / f"{base_name}_{date_suffix}.csv"
    json_path = output_dir / f"{base_name}_{date_suffix}.json"
    saved = []

    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        csv_columns = [info.alias for info in DiscountedItem.model_fields.values()]
        df_for_csv = pd.DataFrame(
            [item.model_dump(by_alias=True) for item in report.discounted_items],
            columns=csv_columns,
        )
        df_for_csv.to_csv(csv_path, index=False)
        saved.append(csv_path)
        logger.info(f"✅ Report saved to: {csv_path}")

        if save_json:
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(report.model_dump(mode="json"), f, indent=2)
            saved.append(json_path)
            logger.info(f"✅ JSON output saved to: {json_path}")
        else:
            logger.info("INFO: Skipping JSON file save as per configuration.")
    except OSError as e:
        logger.error(f"❌ Error saving report outputs: {e}")

    return saved


def post_to_webhook(report: InventoryReport, url: Optional[str] = None) -> bool:
    """
    Posts the report to the webhook. Returns True when the post succeeded.
    """
    url = url or settings.WEBHOOK_URL
    if not url:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info("🚀 Posting inventory report to webhook.")
    payload = {
        "reportType": "inventory",
        "reportData": report.model_dump(mode="json"),
    }

    try:
        response = requests.post(url, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
