import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from inventory_processor import data_handler, filters, pricing, settings
from inventory_processor.pipeline import DataPipeline
from inventory_processor.report import render_report
from inventory_processor.resilience import ResiliencePolicy
from inventory_processor.schemas import InventoryItem, InventoryReport

logger = logging.getLogger(__name__)


class InventoryPipeline(DataPipeline):
    def __init__(
        self,
        source: Optional[Callable[[], list[InventoryItem]]] = None,
        input_path: Optional[Path] = None,
        discount_prefix: str = settings.DISCOUNT_NAME_PREFIX,
        now: Optional[datetime] = None,
        discount_operation: Callable[[], Decimal] = pricing.get_discount_factor,
        discount_policy: Optional[ResiliencePolicy[Decimal]] = None,
        output_dir: Optional[Path] = None,
        test_mode: bool = False,
    ):
        super().__init__("inventory", test_mode=test_mode)
        # The data source is injected; by default the CSV loader (with sample fallback).
        self.source = source or (lambda: data_handler.load_inventory(input_path))
        self.discount_prefix = discount_prefix
        self.now = now
        self.discount_operation = discount_operation
        self.discount_policy = discount_policy
        self.output_dir = output_dir

    def extract(self) -> list[InventoryItem]:
        logger.info("--- Loading Inventory ---")
        items = self.source()
        logger.info(f"  > {len(items)} items loaded.")
        return items

    def transform(self, items: list[InventoryItem]) -> InventoryReport:
        now = self.now or datetime.now()

        logger.info("\n--- Filtering Inventory ---")
        outdated = filters.filter_outdated(items, now=now)
        candidates = filters.filter_by_name_prefix(items, self.discount_prefix)
        logger.info(
            f"  > {len(outdated)} outdated, {len(candidates)} starting with '{self.discount_prefix}'."
        )

        logger.info("\n--- Fetching Discount Factor ---")
        outcome = pricing.get_discount_factor_safe(
            self.discount_operation, self.discount_policy
        )

        return InventoryReport(
            generated_at=now,
            total_quantity=filters.total_quantity(items),
            outdated_category=settings.OUTDATED_CATEGORY,
            outdated_threshold_days=settings.OUTDATED_THRESHOLD_DAYS,
            outdated_items=outdated,
            discount_prefix=self.discount_prefix,
            discount_factor=outcome.value,
            discount_fallback_used=outcome.fallback_used,
            discounted_items=filters.apply_discount(candidates, outcome.value),
        )

    def load(self, report: InventoryReport) -> None:
        for line in render_report(report):
            logger.info(line)

        if self.test_mode:
            logger.info("\n🧪 Test Mode: Skipping file outputs and webhook post.")
            return

        logger.info("\n--- Saving and Sending ---")
        data_handler.save_outputs(report, output_dir=self.output_dir)
        data_handler.post_to_webhook(report)
