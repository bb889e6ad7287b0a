"""
Master data models: categories, prints, sizes, products and weights.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from orange_sugar_inventory.config.app_config import BUNDLE_CATEGORY_TYPE
from orange_sugar_inventory.sku.generator import is_bundle_schema


@dataclass
class Category:
    """
    Represents a product category and its SKU schema.
    """
    id: str
    category_name: str
    category_code: Optional[str] = None
    sku_schema: Optional[int] = 1
    hsn_code: Optional[str] = None
    size_in_product_name: bool = False
    product_name_prefix: Optional[str] = None
    category_type: Optional[str] = None

    @property
    def is_bundle(self) -> bool:
        return (self.category_type or "").strip().lower() == BUNDLE_CATEGORY_TYPE

    @property
    def multi_print(self) -> bool:
        """True when the SKU schema joins several prints."""
        return is_bundle_schema(self.sku_schema)


@dataclass
class Print:
    """
    Represents a print (design) with the short code used in SKUs.
    """
    id: str
    official_print_name: str
    print_code: Optional[str] = None
    color: Optional[str] = None


@dataclass
class Size:
    """
    Represents a size; the name is what SKUs and bundles match on.
    """
    id: str
    size_name: str


@dataclass
class Product:
    """
    Represents a sellable product (one category, one size, one or more prints).
    """
    id: str
    category_id: str
    product_code: str
    name: Optional[str] = None
    size_id: Optional[str] = None
    cost_price: Optional[float] = None
    base_price: Optional[float] = None
    mrp: Optional[float] = None
    hsn_code: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    brand: Optional[str] = None
    length_mm: Optional[float] = None
    width_mm: Optional[float] = None
    height_mm: Optional[float] = None
    weight_id: Optional[str] = None
    print_ids: List[str] = field(default_factory=list)  # Ordered by position


@dataclass
class ProductWeight:
    """
    Shipping weight in grams for a category + size pairing.
    """
    id: str
    category_id: str
    size_id: str
    weight: float
    category_name: Optional[str] = None
    size_name: Optional[str] = None
