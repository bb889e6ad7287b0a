"""
Master data maintenance: categories, prints, sizes, products and weights.
"""
from typing import List, Optional, Sequence
import pandas as pd

from orange_sugar_inventory.data.models.catalog import Category, Print, Product, ProductWeight, Size
from orange_sugar_inventory.data.repositories.category_repository import CategoryRepository
from orange_sugar_inventory.data.repositories.print_repository import PrintRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.weight_repository import WeightRepository
from orange_sugar_inventory.exceptions import DuplicateRecordError, ValidationError
from orange_sugar_inventory.utils.validation import normalize_name_prefix
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)


class MasterDataService:
    """
    Service behind the master data page.

    Name and code checks are case-insensitive; updates ignore the record
    being edited.
    """

    def __init__(
        self,
        category_repository: CategoryRepository,
        print_repository: PrintRepository,
        size_repository: SizeRepository,
        product_repository: ProductRepository,
        weight_repository: WeightRepository
    ):
        self.category_repository = category_repository
        self.print_repository = print_repository
        self.size_repository = size_repository
        self.product_repository = product_repository
        self.weight_repository = weight_repository

    # Categories

    def list_categories(self) -> List[Category]:
        return self.category_repository.get_all()

    def create_category(self, category: Category) -> Category:
        """
        Create a category after checking its name and code are free.

        Raises:
            DuplicateRecordError: If the name or code is taken
        """
        self._check_category(category, exclude_id=None)
        category.product_name_prefix = normalize_name_prefix(category.product_name_prefix)
        return self.category_repository.create(category)

    def update_category(self, category: Category) -> int:
        self._check_category(category, exclude_id=category.id)
        category.product_name_prefix = normalize_name_prefix(category.product_name_prefix)
        return self.category_repository.update(category)

    def delete_category(self, category_id: str) -> int:
        return self.category_repository.delete(category_id)

    def _check_category(self, category: Category, exclude_id: Optional[str]) -> None:
        if not category.category_name or not category.category_code:
            raise ValidationError("Category name and code are required")
        if self.category_repository.name_exists(category.category_name, exclude_id):
            raise DuplicateRecordError(f'Category name "{category.category_name}" already exists')
        if self.category_repository.code_exists(category.category_code, exclude_id):
            raise DuplicateRecordError(
                f'Category code "{category.category_code}" already exists. Please use a different code.'
            )

    # Prints

    def list_prints(self, category_id: Optional[str] = None) -> List[Print]:
        return self.print_repository.get_all(category_id)

    def create_print(self, print_: Print) -> Print:
        self._check_print(print_, exclude_id=None)
        return self.print_repository.create(print_)

    def update_print(self, print_: Print) -> int:
        self._check_print(print_, exclude_id=print_.id)
        return self.print_repository.update(print_)

    def delete_print(self, print_id: str) -> int:
        return self.print_repository.delete(print_id)

    def _check_print(self, print_: Print, exclude_id: Optional[str]) -> None:
        if not print_.official_print_name or not print_.print_code:
            raise ValidationError("Print name and code are required")
        if self.print_repository.name_exists(print_.official_print_name, exclude_id):
            raise DuplicateRecordError(f'Print name "{print_.official_print_name}" already exists')
        if self.print_repository.code_exists(print_.print_code, exclude_id):
            raise DuplicateRecordError(
                f'Print code "{print_.print_code}" already exists. Please use a different code.'
            )

    # Sizes

    def list_sizes(self) -> List[Size]:
        return self.size_repository.get_all()

    def create_size(self, size_name: str) -> Size:
        size_name = (size_name or "").strip()
        if not size_name:
            raise ValidationError("Size name is required")
        if self.size_repository.name_exists(size_name):
            raise DuplicateRecordError(f'Size "{size_name}" already exists')
        return self.size_repository.create(size_name)

    # Products

    def list_products(self) -> pd.DataFrame:
        return self.product_repository.get_raw_data()

    def create_product(self, product: Product, print_ids: Sequence[str]) -> Product:
        """
        Create a product linked to its prints.

        The weight link is looked up from the product's category and size.

        Args:
            product (Product): Product to create
            print_ids (Sequence[str]): Print IDs in display order

        Returns:
            Product: The created product

        Raises:
            DuplicateRecordError: If the SKU is already used
        """
        if not product.product_code:
            raise ValidationError("Product SKU is required")
        if self.product_repository.code_exists(product.product_code):
            raise DuplicateRecordError(f'Product with SKU "{product.product_code}" already exists')

        weight = self.weight_repository.find(product.category_id, product.size_id)
        product.weight_id = weight.id if weight else None
        return self.product_repository.create(product, print_ids)

    # Weights

    def list_weights(self) -> List[ProductWeight]:
        return self.weight_repository.get_all()

    def upsert_weight(self, category_id: str, size_id: str, weight_grams: float) -> bool:
        """
        Set the weight for a category and size.

        Returns:
            bool: True when an existing weight was updated, False when created
        """
        if weight_grams is None or weight_grams <= 0:
            raise ValidationError("Weight must be greater than zero")

        existing = self.weight_repository.find(category_id, size_id)
        if existing:
            self.weight_repository.update(existing.id, weight_grams)
            logger.info(f"Updated weight for category={category_id}, size={size_id} to {weight_grams}g")
            return True

        self.weight_repository.create(category_id, size_id, weight_grams)
        logger.info(f"Created weight for category={category_id}, size={size_id}: {weight_grams}g")
        return False

    def delete_weight(self, weight_id: str) -> int:
        return self.weight_repository.delete(weight_id)
