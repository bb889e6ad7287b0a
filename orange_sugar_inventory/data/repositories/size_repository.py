"""
Size repository for the SIZES table.
"""
from typing import List, Optional, Sequence
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.catalog import Size
from orange_sugar_inventory.config.database_config import (
    SIZES_TABLE,
    PRODUCTS_TABLE,
    PRODUCT_PRINTS_TABLE
)
from orange_sugar_inventory.sku.sizes import sort_sizes
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

SIZES_QUERY = f"SELECT ID, SIZE_NAME FROM {SIZES_TABLE}"

SIZE_BY_ID_QUERY = f"SELECT ID, SIZE_NAME FROM {SIZES_TABLE} WHERE ID = :size_id"

SIZE_BY_NAME_QUERY = f"SELECT ID, SIZE_NAME FROM {SIZES_TABLE} WHERE SIZE_NAME = :size_name LIMIT 1"

SIZES_BY_CATEGORY_QUERY = f"""
SELECT DISTINCT s.ID, s.SIZE_NAME
FROM {SIZES_TABLE} s
JOIN {PRODUCTS_TABLE} p ON p.SIZE_ID = s.ID
WHERE p.CATEGORY_ID = :category_id
"""

# Sizes of products in the category linked to every one of :print_ids
SIZES_BY_CATEGORY_AND_PRINTS_QUERY = f"""
SELECT DISTINCT s.ID, s.SIZE_NAME
FROM {SIZES_TABLE} s
JOIN (
    SELECT p.ID, p.SIZE_ID
    FROM {PRODUCTS_TABLE} p
    JOIN {PRODUCT_PRINTS_TABLE} pp ON pp.PRODUCT_ID = p.ID
    WHERE p.CATEGORY_ID = :category_id
      AND p.SIZE_ID IS NOT NULL
      AND pp.PRINT_ID IN :print_ids
    GROUP BY p.ID, p.SIZE_ID
    HAVING COUNT(DISTINCT pp.PRINT_ID) = :print_count
) matched ON matched.SIZE_ID = s.ID
"""

SIZE_DUPLICATE_QUERY = f"SELECT ID FROM {SIZES_TABLE} WHERE SIZE_NAME ILIKE :size_name LIMIT 1"

INSERT_SIZE = f"INSERT INTO {SIZES_TABLE} (ID, SIZE_NAME) VALUES (:id, :size_name)"

# Used by seeding: insert only unseen names
MERGE_SIZE = f"""
MERGE INTO {SIZES_TABLE} t
USING (SELECT :id AS ID, :size_name AS SIZE_NAME) s
ON t.SIZE_NAME = s.SIZE_NAME
WHEN NOT MATCHED THEN INSERT (ID, SIZE_NAME) VALUES (s.ID, s.SIZE_NAME)
"""


class SizeRepository(BaseRepository[Size]):
    """
    Repository for accessing sizes. Lists come back in display order.
    """

    def get_all(self, category_id: Optional[str] = None, print_ids: Optional[Sequence[str]] = None) -> List[Size]:
        """
        Get sizes, optionally restricted to a category and its prints.

        Args:
            category_id (Optional[str]): Only sizes with products in this category
            print_ids (Optional[Sequence[str]]): Only products carrying all these prints

        Returns:
            List[Size]: Sizes sorted by the display order
        """
        df = self.get_raw_data(category_id, print_ids)
        sizes = [Size(id=record["id"], size_name=record["size_name"]) for record in self._records(df)]
        return sort_sizes(sizes)

    def get_raw_data(self, category_id: Optional[str] = None, print_ids: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        Get raw size data as a pandas DataFrame.

        Returns:
            pd.DataFrame: The size data
        """
        if category_id and print_ids is not None:
            if not print_ids:
                return pd.DataFrame(columns=["id", "size_name"])
            unique_ids = list(dict.fromkeys(print_ids))
            return self._execute_query(
                SIZES_BY_CATEGORY_AND_PRINTS_QUERY,
                {"category_id": category_id, "print_ids": unique_ids, "print_count": len(unique_ids)}
            )
        if category_id:
            return self._execute_query(SIZES_BY_CATEGORY_QUERY, {"category_id": category_id})
        return self._execute_query(SIZES_QUERY)

    def get_by_id(self, size_id: str) -> Optional[Size]:
        records = self._records(self._execute_query(SIZE_BY_ID_QUERY, {"size_id": size_id}))
        return Size(id=records[0]["id"], size_name=records[0]["size_name"]) if records else None

    def get_by_name(self, size_name: str) -> Optional[Size]:
        records = self._records(self._execute_query(SIZE_BY_NAME_QUERY, {"size_name": size_name}))
        return Size(id=records[0]["id"], size_name=records[0]["size_name"]) if records else None

    def name_exists(self, size_name: str) -> bool:
        return not self._execute_query(SIZE_DUPLICATE_QUERY, {"size_name": size_name}).empty

    def create(self, size_name: str) -> Size:
        size = Size(id=self._new_id(), size_name=size_name)
        self._execute_statement(INSERT_SIZE, {"id": size.id, "size_name": size.size_name})
        logger.info(f"Created size {size_name}.")
        return size

    def upsert(self, size_name: str) -> int:
        """
        Insert a size unless one with the same name exists.

        Returns:
            int: 1 when inserted, 0 when it already existed
        """
        return self._execute_statement(MERGE_SIZE, {"id": self._new_id(), "size_name": size_name})
