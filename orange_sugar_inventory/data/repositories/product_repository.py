"""
Product repository for the PRODUCTS and PRODUCT_PRINTS tables.
"""
from typing import Any, Dict, List, Optional, Sequence
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.catalog import Product
from orange_sugar_inventory.config.database_config import (
    PRODUCTS_TABLE,
    PRODUCT_PRINTS_TABLE,
    CATEGORIES_TABLE,
    SIZES_TABLE
)
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

PRODUCT_COLUMNS = """
    p.ID, p.CATEGORY_ID, p.SIZE_ID, p.PRODUCT_CODE, p.NAME, p.COST_PRICE,
    p.BASE_PRICE, p.MRP, p.HSN_CODE, p.MATERIAL, p.COLOR, p.BRAND,
    p.LENGTH_MM, p.WIDTH_MM, p.HEIGHT_MM, p.WEIGHT_ID
"""

PRODUCTS_LIST_QUERY = f"""
SELECT {PRODUCT_COLUMNS}, c.CATEGORY_NAME, s.SIZE_NAME
FROM {PRODUCTS_TABLE} p
LEFT JOIN {CATEGORIES_TABLE} c ON c.ID = p.CATEGORY_ID
LEFT JOIN {SIZES_TABLE} s ON s.ID = p.SIZE_ID
ORDER BY p.NAME
"""

# Products of a category and size (NULL size matches size-less products), with their prints in position order
PRODUCTS_WITH_PRINTS_QUERY = f"""
SELECT {PRODUCT_COLUMNS}, pp.PRINT_ID, pp.POSITION
FROM {PRODUCTS_TABLE} p
LEFT JOIN {PRODUCT_PRINTS_TABLE} pp ON pp.PRODUCT_ID = p.ID
WHERE p.CATEGORY_ID = :category_id
  AND (p.SIZE_ID = :size_id OR (:size_id IS NULL AND p.SIZE_ID IS NULL))
ORDER BY p.ID, pp.POSITION
"""

PRODUCT_BY_CATEGORY_SIZE_PRINT_QUERY = f"""
SELECT {PRODUCT_COLUMNS}
FROM {PRODUCTS_TABLE} p
JOIN {PRODUCT_PRINTS_TABLE} pp ON pp.PRODUCT_ID = p.ID
WHERE p.CATEGORY_ID = :category_id
  AND p.SIZE_ID = :size_id
  AND pp.PRINT_ID = :print_id
LIMIT 1
"""

PRODUCT_BY_CATEGORY_SIZE_NAME_PRINT_QUERY = f"""
SELECT {PRODUCT_COLUMNS}
FROM {PRODUCTS_TABLE} p
JOIN {SIZES_TABLE} s ON s.ID = p.SIZE_ID
JOIN {PRODUCT_PRINTS_TABLE} pp ON pp.PRODUCT_ID = p.ID
WHERE p.CATEGORY_ID = :category_id
  AND s.SIZE_NAME = :size_name
  AND pp.PRINT_ID = :print_id
LIMIT 1
"""

PRODUCT_CODE_EXISTS_QUERY = f"SELECT ID FROM {PRODUCTS_TABLE} WHERE PRODUCT_CODE = :product_code LIMIT 1"

INSERT_PRODUCT = f"""
INSERT INTO {PRODUCTS_TABLE}
    (ID, CATEGORY_ID, SIZE_ID, PRODUCT_CODE, NAME, COST_PRICE, BASE_PRICE, MRP,
     HSN_CODE, MATERIAL, COLOR, BRAND, LENGTH_MM, WIDTH_MM, HEIGHT_MM, WEIGHT_ID)
VALUES
    (:id, :category_id, :size_id, :product_code, :name, :cost_price, :base_price, :mrp,
     :hsn_code, :material, :color, :brand, :length_mm, :width_mm, :height_mm, :weight_id)
"""

INSERT_PRODUCT_PRINT = f"""
INSERT INTO {PRODUCT_PRINTS_TABLE} (PRODUCT_ID, PRINT_ID, POSITION)
VALUES (:product_id, :print_id, :position)
"""

PRODUCT_FIELDS = (
    "id", "category_id", "size_id", "product_code", "name", "cost_price",
    "base_price", "mrp", "hsn_code", "material", "color", "brand",
    "length_mm", "width_mm", "height_mm", "weight_id"
)


class ProductRepository(BaseRepository[Product]):
    """
    Repository for accessing products and their print links.
    """

    def get_all(self, *args, **kwargs) -> List[Product]:
        """
        Get all products ordered by name.

        Returns:
            List[Product]: A list of Product objects
        """
        return [self._to_product(record) for record in self._records(self.get_raw_data())]

    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        """
        Get products with their category and size names.

        Returns:
            pd.DataFrame: The product listing
        """
        logger.info("Fetching products...")
        df = self._execute_query(PRODUCTS_LIST_QUERY)
        logger.info(f"Retrieved {len(df)} products.")
        return df

    def find_with_prints(self, category_id: str, size_id: Optional[str]) -> List[Product]:
        """
        Get the products of a category and size with their ordered print IDs.

        Args:
            category_id (str): Category ID
            size_id (Optional[str]): Size ID, None for size-less products

        Returns:
            List[Product]: Products with print_ids filled in position order
        """
        df = self._execute_query(PRODUCTS_WITH_PRINTS_QUERY, {"category_id": category_id, "size_id": size_id})
        products: Dict[str, Product] = {}
        for record in self._records(df):
            product = products.get(record["id"])
            if product is None:
                product = self._to_product(record)
                products[product.id] = product
            if record.get("print_id") is not None:
                product.print_ids.append(record["print_id"])
        return list(products.values())

    def find_by_print(self, category_id: str, size_id: str, print_id: str) -> Optional[Product]:
        """
        Get the product for a category, size and print.
        """
        df = self._execute_query(
            PRODUCT_BY_CATEGORY_SIZE_PRINT_QUERY,
            {"category_id": category_id, "size_id": size_id, "print_id": print_id}
        )
        records = self._records(df)
        return self._to_product(records[0]) if records else None

    def find_by_size_name(self, category_id: str, size_name: str, print_id: str) -> Optional[Product]:
        """
        Get the product for a category, size name and print.
        """
        df = self._execute_query(
            PRODUCT_BY_CATEGORY_SIZE_NAME_PRINT_QUERY,
            {"category_id": category_id, "size_name": size_name, "print_id": print_id}
        )
        records = self._records(df)
        return self._to_product(records[0]) if records else None

    def code_exists(self, product_code: str) -> bool:
        return not self._execute_query(PRODUCT_CODE_EXISTS_QUERY, {"product_code": product_code}).empty

    def create(self, product: Product, print_ids: Sequence[str]) -> Product:
        """
        Insert a product and link its prints with 1-based positions.

        Args:
            product (Product): The product to insert
            print_ids (Sequence[str]): Print IDs in display order

        Returns:
            Product: The inserted product
        """
        if not product.id:
            product.id = self._new_id()
        self._execute_statement(INSERT_PRODUCT, {name: getattr(product, name) for name in PRODUCT_FIELDS})

        for position, print_id in enumerate(print_ids, start=1):
            self._execute_statement(
                INSERT_PRODUCT_PRINT,
                {"product_id": product.id, "print_id": print_id, "position": position}
            )
        product.print_ids = list(print_ids)

        logger.info(f"Created product {product.product_code} with {len(product.print_ids)} prints.")
        return product

    @staticmethod
    def _to_product(record: Dict[str, Any]) -> Product:
        return Product(**{name: record.get(name) for name in PRODUCT_FIELDS})
