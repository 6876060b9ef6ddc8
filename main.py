import argparse
import logging
import sys
from pathlib import Path

from inventory_processor import settings
from inventory_processor.data_handler import InventoryLoadError
from inventory_processor.logger import setup_logger
from inventory_processor.pipelines.inventory import InventoryPipeline

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Filter the inventory and price discounted items."
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help=f"Inventory CSV (default: {settings.INVENTORY_FILE}; built-in sample batch if missing).",
    )
    parser.add_argument(
        "--prefix",
        default=settings.DISCOUNT_NAME_PREFIX,
        help="Name prefix of the items to discount (case-insensitive).",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Skip writing output files and posting to the webhook.",
    )
    return parser.parse_args(argv)


def run_process(argv=None) -> int:
    """Main orchestration function to run the inventory report."""
    args = parse_args(argv)
    setup_logger()

    logger.info("--- Inventory Processing Started ---")
    pipeline = InventoryPipeline(
        input_path=args.input, discount_prefix=args.prefix, test_mode=args.test
    )
    try:
        pipeline.run()
    except InventoryLoadError as e:
        logger.error(f"❌ Could not load inventory: {e}")
        return 1

    logger.info("\n--- Inventory Processing Complete ---")
    return 0


if __name__ == "__main__":
    sys.exit(run_process())
