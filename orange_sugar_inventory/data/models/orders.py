"""
Purchase order models.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from orange_sugar_inventory.config.app_config import DEFAULT_TAX_CLASS


@dataclass
class PurchaseOrder:
    """
    Represents one purchase order line.
    """
    id: str
    sku: str
    category: str
    print_name: str
    size: str
    cost_price: float
    quantity: int
    po_date: date
    discount: float = 0.0
    tax_class: int = DEFAULT_TAX_CLASS
    created_at: Optional[datetime] = None

    @property
    def line_value(self) -> float:
        return self.cost_price * self.quantity


@dataclass
class SizeQuantity:
    """
    One size row of the purchase order form.
    """
    size: str
    quantity: int
    cost_price: float
    size_id: Optional[str] = None
    sku: Optional[str] = None
