"""
Print repository for the PRINTS_NAME table.
"""
from typing import Any, Dict, List, Optional
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.catalog import Print
from orange_sugar_inventory.config.database_config import (
    PRINTS_TABLE,
    PRODUCTS_TABLE,
    PRODUCT_PRINTS_TABLE
)
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

PRINTS_QUERY = f"""
SELECT ID, OFFICIAL_PRINT_NAME, PRINT_CODE, COLOR
FROM {PRINTS_TABLE}
ORDER BY OFFICIAL_PRINT_NAME
"""

# Prints used by at least one product of the category
PRINTS_BY_CATEGORY_QUERY = f"""
SELECT DISTINCT pn.ID, pn.OFFICIAL_PRINT_NAME, pn.PRINT_CODE, pn.COLOR
FROM {PRINTS_TABLE} pn
JOIN {PRODUCT_PRINTS_TABLE} pp ON pp.PRINT_ID = pn.ID
JOIN {PRODUCTS_TABLE} p ON p.ID = pp.PRODUCT_ID
WHERE p.CATEGORY_ID = :category_id
ORDER BY pn.OFFICIAL_PRINT_NAME
"""

PRINT_DUPLICATE_QUERY = f"""
SELECT ID
FROM {PRINTS_TABLE}
WHERE {{column}} ILIKE :value
  AND (:exclude_id IS NULL OR ID <> :exclude_id)
LIMIT 1
"""

INSERT_PRINT = f"""
INSERT INTO {PRINTS_TABLE} (ID, OFFICIAL_PRINT_NAME, PRINT_CODE, COLOR)
VALUES (:id, :official_print_name, :print_code, :color)
"""

UPDATE_PRINT = f"""
UPDATE {PRINTS_TABLE}
SET OFFICIAL_PRINT_NAME = :official_print_name,
    PRINT_CODE = :print_code,
    COLOR = :color
WHERE ID = :id
"""

DELETE_PRINT = f"DELETE FROM {PRINTS_TABLE} WHERE ID = :id"


class PrintRepository(BaseRepository[Print]):
    """
    Repository for accessing prints.
    """

    def get_all(self, category_id: Optional[str] = None) -> List[Print]:
        """
        Get all prints, or only those used by a category's products.

        Args:
            category_id (Optional[str]): Restrict to this category

        Returns:
            List[Print]: A list of Print objects ordered by name
        """
        df = self.get_raw_data(category_id)
        return [
            Print(
                id=record["id"],
                official_print_name=record["official_print_name"],
                print_code=record.get("print_code"),
                color=record.get("color")
            )
            for record in self._records(df)
        ]

    def get_raw_data(self, category_id: Optional[str] = None) -> pd.DataFrame:
        """
        Get raw print data as a pandas DataFrame.

        Args:
            category_id (Optional[str]): Restrict to this category

        Returns:
            pd.DataFrame: The print data
        """
        if category_id:
            return self._execute_query(PRINTS_BY_CATEGORY_QUERY, {"category_id": category_id})
        return self._execute_query(PRINTS_QUERY)

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        return self._exists("OFFICIAL_PRINT_NAME", name, exclude_id)

    def code_exists(self, code: str, exclude_id: Optional[str] = None) -> bool:
        return self._exists("PRINT_CODE", code, exclude_id)

    def _exists(self, column: str, value: str, exclude_id: Optional[str]) -> bool:
        query = PRINT_DUPLICATE_QUERY.format(column=column)
        return not self._execute_query(query, {"value": value, "exclude_id": exclude_id}).empty

    def create(self, print_: Print) -> Print:
        if not print_.id:
            print_.id = self._new_id()
        self._execute_statement(INSERT_PRINT, self._to_params(print_))
        logger.info(f"Created print {print_.official_print_name} ({print_.print_code}).")
        return print_

    def update(self, print_: Print) -> int:
        return self._execute_statement(UPDATE_PRINT, self._to_params(print_))

    def delete(self, print_id: str) -> int:
        return self._execute_statement(DELETE_PRINT, {"id": print_id})

    @staticmethod
    def _to_params(print_: Print) -> Dict[str, Any]:
        return {
            "id": print_.id,
            "official_print_name": print_.official_print_name,
            "print_code": print_.print_code,
            "color": print_.color,
        }
