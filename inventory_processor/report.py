from .schemas import InventoryReport
from .utils import format_currency, format_date


def render_report(report: InventoryReport) -> list[str]:
    """Turns an inventory report into the lines shown on the console."""
    lines = [f"\nTotal Available Inventory Count: {report.total_quantity}"]

    lines.append(
        f"\nOutdated items (Category '{report.outdated_category}', "
        f"not restocked in {report.outdated_threshold_days} days): {len(report.outdated_items)}"
    )
    for item in report.outdated_items:
        lines.append(
            f" - {item.name} ({item.category}) - Last Restock: {format_date(item.last_restock_date)}"
        )

    lines.append(
        f"\nItems starting with '{report.discount_prefix}' (after discount calculation):"
    )
    if report.discount_fallback_used:
        lines.append(
            f" (discount lookup failed; default factor {report.discount_factor} applied)"
        )
    for item in report.discounted_items:
        line = f" - {item.name} (ID: {item.item_id}) - New Price: {format_currency(item.adjusted_price)}"
        if item.original_price is None:
            line += " (Original price was NULL)"
        lines.append(line)

    return lines
