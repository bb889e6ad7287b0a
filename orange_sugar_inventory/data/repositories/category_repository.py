"""
Category repository for the PRODUCT_CATEGORIES table.
"""
from typing import Any, Dict, List, Optional
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.catalog import Category
from orange_sugar_inventory.config.database_config import CATEGORIES_TABLE
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

CATEGORY_COLUMNS = """
    ID, CATEGORY_NAME, CATEGORY_CODE, SKU_SCHEMA, HSN_CODE,
    SIZE_IN_PRODUCT_NAME, PRODUCT_NAME_PREFIX, CATEGORY_TYPE
"""

CATEGORIES_QUERY = f"""
SELECT {CATEGORY_COLUMNS}
FROM {CATEGORIES_TABLE}
ORDER BY CATEGORY_NAME
"""

CATEGORY_BY_ID_QUERY = f"""
SELECT {CATEGORY_COLUMNS}
FROM {CATEGORIES_TABLE}
WHERE ID = :category_id
"""

# Case-insensitive duplicate lookup; :exclude_id is NULL when creating
CATEGORY_DUPLICATE_QUERY = f"""
SELECT ID
FROM {CATEGORIES_TABLE}
WHERE {{column}} ILIKE :value
  AND (:exclude_id IS NULL OR ID <> :exclude_id)
LIMIT 1
"""

INSERT_CATEGORY = f"""
INSERT INTO {CATEGORIES_TABLE}
    (ID, CATEGORY_NAME, CATEGORY_CODE, SKU_SCHEMA, HSN_CODE,
     SIZE_IN_PRODUCT_NAME, PRODUCT_NAME_PREFIX, CATEGORY_TYPE)
VALUES
    (:id, :category_name, :category_code, :sku_schema, :hsn_code,
     :size_in_product_name, :product_name_prefix, :category_type)
"""

UPDATE_CATEGORY = f"""
UPDATE {CATEGORIES_TABLE}
SET CATEGORY_NAME = :category_name,
    CATEGORY_CODE = :category_code,
    SKU_SCHEMA = :sku_schema,
    HSN_CODE = :hsn_code,
    SIZE_IN_PRODUCT_NAME = :size_in_product_name,
    PRODUCT_NAME_PREFIX = :product_name_prefix,
    CATEGORY_TYPE = :category_type
WHERE ID = :id
"""

DELETE_CATEGORY = f"DELETE FROM {CATEGORIES_TABLE} WHERE ID = :id"


class CategoryRepository(BaseRepository[Category]):
    """
    Repository for accessing product categories.
    """

    def get_all(self, *args, **kwargs) -> List[Category]:
        """
        Get all categories ordered by name.

        Returns:
            List[Category]: A list of Category objects
        """
        return [self._to_category(record) for record in self._records(self.get_raw_data())]

    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        """
        Get raw category data as a pandas DataFrame.

        Returns:
            pd.DataFrame: The category data
        """
        logger.info("Fetching categories...")
        df = self._execute_query(CATEGORIES_QUERY)
        logger.info(f"Retrieved {len(df)} categories.")
        return df

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """
        Get a single category.

        Args:
            category_id (str): Category ID

        Returns:
            Optional[Category]: The category, or None if it does not exist
        """
        records = self._records(self._execute_query(CATEGORY_BY_ID_QUERY, {"category_id": category_id}))
        return self._to_category(records[0]) if records else None

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        return self._exists("CATEGORY_NAME", name, exclude_id)

    def code_exists(self, code: str, exclude_id: Optional[str] = None) -> bool:
        return self._exists("CATEGORY_CODE", code, exclude_id)

    def _exists(self, column: str, value: str, exclude_id: Optional[str]) -> bool:
        query = CATEGORY_DUPLICATE_QUERY.format(column=column)
        df = self._execute_query(query, {"value": value, "exclude_id": exclude_id})
        return not df.empty

    def create(self, category: Category) -> Category:
        """
        Insert a category, assigning an ID when it has none.

        Args:
            category (Category): The category to insert

        Returns:
            Category: The inserted category
        """
        if not category.id:
            category.id = self._new_id()
        self._execute_statement(INSERT_CATEGORY, self._to_params(category))
        logger.info(f"Created category {category.category_name} ({category.category_code}).")
        return category

    def update(self, category: Category) -> int:
        return self._execute_statement(UPDATE_CATEGORY, self._to_params(category))

    def delete(self, category_id: str) -> int:
        return self._execute_statement(DELETE_CATEGORY, {"id": category_id})

    @staticmethod
    def _to_params(category: Category) -> Dict[str, Any]:
        return {
            "id": category.id,
            "category_name": category.category_name,
            "category_code": category.category_code,
            "sku_schema": category.sku_schema,
            "hsn_code": category.hsn_code,
            "size_in_product_name": bool(category.size_in_product_name),
            "product_name_prefix": category.product_name_prefix,
            "category_type": category.category_type,
        }

    @staticmethod
    def _to_category(record: Dict[str, Any]) -> Category:
        sku_schema = record.get("sku_schema")
        return Category(
            id=record["id"],
            category_name=record["category_name"],
            category_code=record.get("category_code"),
            sku_schema=int(sku_schema) if sku_schema is not None else None,
            hsn_code=record.get("hsn_code"),
            size_in_product_name=bool(record.get("size_in_product_name")),
            product_name_prefix=record.get("product_name_prefix"),
            category_type=record.get("category_type")
        )
