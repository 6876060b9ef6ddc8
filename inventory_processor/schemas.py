from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class InventoryItem(BaseModel):
    """
    Defines the data contract for a single inventory record.
    Records are read-only once loaded; derived values (like a discounted price)
    live in separate models.
    """

    item_id: int = Field(..., alias="Item ID")
    name: str = Field(..., min_length=1, alias="Name")
    price: Optional[Decimal] = Field(default=None, ge=0, alias="Price")
    quantity: int = Field(default=0, ge=0, alias="Quantity")
    category: str = Field(default="", alias="Category")
    last_restock_date: Optional[datetime] = Field(
        default=None, alias="Last Restock Date"
    )

    class Config:
        # Build from field names in code and from CSV headers (aliases) on load.
        populate_by_name = True
        # Whitespace-only names count as empty.
        str_strip_whitespace = True
        frozen = True

    @field_validator("last_restock_date")
    @classmethod
    def to_naive_local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Offset-aware dates are converted to naive local time so they compare with datetime.now()."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value


class DiscountedItem(BaseModel):
    """An item from the discount selection with its adjusted price."""

    item_id: int = Field(..., alias="Item ID")
    name: str = Field(..., alias="Name")
    original_price: Optional[Decimal] = Field(default=None, alias="Original Price")
    adjusted_price: Decimal = Field(..., alias="New Price")

    class Config:
        populate_by_name = True
        frozen = True


class InventoryReport(BaseModel):
    generated_at: datetime
    total_quantity: int = Field(..., ge=0)
    outdated_category: str = ""
    outdated_threshold_days: int = Field(default=0, ge=0)
    outdated_items: list[InventoryItem] = Field(default_factory=list)
    discount_prefix: str = ""
    discount_factor: Decimal
    discount_fallback_used: bool = False
    discounted_items: list[DiscountedItem] = Field(default_factory=list)
