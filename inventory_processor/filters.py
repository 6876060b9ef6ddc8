from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from . import settings
from .schemas import DiscountedItem, InventoryItem


def filter_outdated(
    items: Iterable[InventoryItem],
    now: Optional[datetime] = None,
    category: str = settings.OUTDATED_CATEGORY,
    threshold_days: int = settings.OUTDATED_THRESHOLD_DAYS,
) -> list[InventoryItem]:
    """
    Returns the items in `category` that were last restocked more than
    `threshold_days` days before `now`, in their original order.
    Items with no restock date are never considered outdated.
    """
    now = now or datetime.now()
    threshold = timedelta(days=threshold_days)
    return [
        item
        for item in items
        if item.category == category
        and item.last_restock_date is not None
        and now - item.last_restock_date > threshold
    ]


def filter_by_name_prefix(
    items: Iterable[InventoryItem], prefix: str
) -> list[InventoryItem]:
    """Returns the items whose name starts with `prefix`, ignoring case."""
    prefix = prefix.casefold()
    return [item for item in items if item.name.casefold().startswith(prefix)]


def total_quantity(items: Iterable[InventoryItem]) -> int:
    return sum(item.quantity for item in items)


def adjusted_price(item: InventoryItem, factor: Decimal) -> Decimal:
    # No price means no sellable value, whatever the factor.
    if item.price is None:
        return Decimal("0")
    return item.price * factor


def apply_discount(
    items: Iterable[InventoryItem], factor: Decimal
) -> list[DiscountedItem]:
    return [
        DiscountedItem(
            item_id=item.item_id,
            name=item.name,
            original_price=item.price,
            adjusted_price=adjusted_price(item, factor),
        )
        for item in items
    ]
