"""
Item master generation for single products.
"""
from typing import Any, Dict, List, Optional, Sequence

from orange_sugar_inventory.config.app_config import ITEM_MASTER_DEFAULTS
from orange_sugar_inventory.data.models.catalog import Category, Print, Product
from orange_sugar_inventory.data.models.item_master import GenerationResult
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.weight_repository import WeightRepository
from orange_sugar_inventory.data.repositories.item_master_repository import ItemMasterRepository
from orange_sugar_inventory.exceptions import DatabaseError
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

NO_PRODUCT_ERROR = "No product found for this category/print/size combination"


def build_item_master_row(
    category: Category,
    print_: Print,
    product: Product,
    size_name: Optional[str],
    weight: Optional[float]
) -> Dict[str, Any]:
    """
    Build the item master row for one product.

    The category column carries the category name, and the print name goes
    in the style column.

    Args:
        category (Category): Product category
        print_ (Print): Product print
        product (Product): Matched product
        size_name (Optional[str]): Size name
        weight (Optional[float]): Weight in grams for the category and size

    Returns:
        Dict[str, Any]: Row keyed by column name
    """
    row = {
        "category_code": category.category_name,
        "product_code": product.product_code,
        "name": product.name,
        "color": product.color or None,
        "size": size_name or None,
        "weight_gms": weight or None,
        "hsn_code": product.hsn_code or None,
        "cost_price": product.cost_price or None,
        "base_price": product.base_price or None,
        "mrp": product.mrp or None,
        "material": product.material or None,
        "style": print_.official_print_name,
        "product_id": product.id,
        "is_visible": True,
    }
    row.update(ITEM_MASTER_DEFAULTS)
    return row


class ItemMasterService:
    """
    Service behind the item master page.
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        size_repository: SizeRepository,
        weight_repository: WeightRepository,
        item_master_repository: ItemMasterRepository
    ):
        self.product_repository = product_repository
        self.size_repository = size_repository
        self.weight_repository = weight_repository
        self.item_master_repository = item_master_repository

    def generate(self, category: Category, print_: Print, size_ids: Sequence[str]) -> GenerationResult:
        """
        Upsert an item master row for each selected size.

        Failures are recorded per size and do not stop the run.

        Args:
            category (Category): Selected category
            print_ (Print): Selected print
            size_ids (Sequence[str]): Selected size IDs

        Returns:
            GenerationResult: One result per size
        """
        result = GenerationResult()

        for size_id in size_ids:
            try:
                product = self.product_repository.find_by_print(category.id, size_id, print_.id)
            except DatabaseError as e:
                logger.error(f"Product lookup failed for category={category.id}, size={size_id}: {e.message}")
                result.add("", error=e.message)
                continue

            if product is None:
                logger.error(f"No product found for category={category.id}, size={size_id}, print={print_.id}")
                result.add("", error=NO_PRODUCT_ERROR)
                continue

            size = self.size_repository.get_by_id(size_id)
            weight = self.weight_repository.grams_for(category.id, size_id)
            row = build_item_master_row(category, print_, product, size.size_name if size else None, weight)

            try:
                self.item_master_repository.upsert(row)
            except DatabaseError as e:
                result.add(product.product_code, error=e.message)
            else:
                result.add(product.product_code)

        logger.info(
            f"Item master run for {category.category_name} / {print_.official_print_name}: "
            f"{result.success_count} ok, {result.error_count} failed"
        )
        return result

    def list_visible(self) -> List[Dict[str, Any]]:
        return self.item_master_repository.get_all()

    def hide_all(self) -> int:
        """
        Hide every visible row; rows stay in the table.

        Returns:
            int: Number of rows hidden
        """
        return self.item_master_repository.hide_all()
