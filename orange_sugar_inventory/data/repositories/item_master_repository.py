"""
Item master repository for the ITEM_MASTER table.
"""
from typing import Any, Dict, List
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.config.database_config import ITEM_MASTER_TABLE
from orange_sugar_inventory.utils.date_helpers import utc_now
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

VISIBLE_ITEMS_QUERY = f"""
SELECT *
FROM {ITEM_MASTER_TABLE}
WHERE IS_VISIBLE = TRUE
ORDER BY CREATED_AT DESC
"""

HIDE_ALL_ITEMS = f"UPDATE {ITEM_MASTER_TABLE} SET IS_VISIBLE = FALSE WHERE IS_VISIBLE = TRUE"


def build_upsert_statement(columns: List[str]) -> str:
    """
    Build a MERGE keyed on PRODUCT_CODE for the given columns.

    Args:
        columns (List[str]): Lower-case column names, must include product_code

    Returns:
        str: MERGE statement with :column placeholders
    """
    source = ", ".join(f":{column} AS {column.upper()}" for column in columns)
    updates = ", ".join(
        f"t.{column.upper()} = s.{column.upper()}" for column in columns if column not in ("product_code", "created_at")
    )
    insert_columns = ", ".join(column.upper() for column in columns)
    insert_values = ", ".join(f"s.{column.upper()}" for column in columns)
    return f"""
MERGE INTO {ITEM_MASTER_TABLE} t
USING (SELECT {source}) s
ON t.PRODUCT_CODE = s.PRODUCT_CODE
WHEN MATCHED THEN UPDATE SET {updates}
WHEN NOT MATCHED THEN INSERT ({insert_columns}) VALUES ({insert_values})
"""


class ItemMasterRepository(BaseRepository[Dict[str, Any]]):
    """
    Repository for single-product item master rows.

    Rows are plain dicts keyed by lower-case column name, matching the
    export column set.
    """

    def get_all(self, *args, **kwargs) -> List[Dict[str, Any]]:
        """
        Get visible item master rows, newest first.

        Returns:
            List[Dict[str, Any]]: One dict per row
        """
        return self._records(self.get_raw_data())

    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        logger.info("Fetching visible item master rows...")
        return self._execute_query(VISIBLE_ITEMS_QUERY)

    def upsert(self, row: Dict[str, Any]) -> int:
        """
        Insert or update a row, matched on product_code.

        Args:
            row (Dict[str, Any]): Column -> value; product_code is required

        Returns:
            int: Number of affected rows
        """
        params = dict(row)
        params.setdefault("is_visible", True)
        params.setdefault("created_at", utc_now())
        statement = build_upsert_statement(list(params))
        return self._execute_statement(statement, params)

    def hide_all(self) -> int:
        """
        Soft-delete every visible row.

        Returns:
            int: Number of rows hidden
        """
        count = self._execute_statement(HIDE_ALL_ITEMS)
        logger.info(f"Hid {count} item master rows.")
        return count
