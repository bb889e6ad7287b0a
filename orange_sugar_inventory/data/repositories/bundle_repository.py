"""
Bundle repositories for the BUNDLE_REFERENCE and BUNDLE_ITEM_MASTER tables.
"""
from dataclasses import asdict, fields
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.item_master import BundleReferenceRow
from orange_sugar_inventory.config.app_config import SEED_BATCH_SIZE
from orange_sugar_inventory.config.database_config import (
    BUNDLE_REFERENCE_TABLE,
    BUNDLE_ITEM_MASTER_TABLE
)
from orange_sugar_inventory.utils.date_helpers import business_day_bounds, utc_now
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

REFERENCE_COLUMNS = [f.name for f in fields(BundleReferenceRow)]

REFERENCE_QUERY = f"SELECT * FROM {BUNDLE_REFERENCE_TABLE} ORDER BY PRODUCT_CODE"

REFERENCE_BY_CATEGORY_SIZE_QUERY = f"""
SELECT *
FROM {BUNDLE_REFERENCE_TABLE}
WHERE CATEGORY_CODE = :category_code
  AND SIZE = :size
"""

REFERENCE_COMPONENT_QUERY = f"""
SELECT *
FROM {BUNDLE_REFERENCE_TABLE}
WHERE PRODUCT_CODE = :product_code
  AND COMPONENT_PRODUCT_CODE = :component_product_code
LIMIT 1
"""

CLEAR_REFERENCE = f"DELETE FROM {BUNDLE_REFERENCE_TABLE}"

BUNDLE_ITEMS_QUERY = f"""
SELECT *
FROM {BUNDLE_ITEM_MASTER_TABLE}
{{where}}
ORDER BY CREATED_AT DESC
"""

DELETE_BUNDLE_ITEMS = f"DELETE FROM {BUNDLE_ITEM_MASTER_TABLE} {{where}}"

DAY_FILTER = "WHERE CREATED_AT >= :start_at AND CREATED_AT < :end_at"


def build_insert_statement(table: str, columns: Sequence[str], row_count: int = 1) -> str:
    """
    Build a multi-row INSERT with :column_index placeholders.

    Args:
        table (str): Fully qualified table name
        columns (Sequence[str]): Lower-case column names
        row_count (int): Number of VALUES tuples

    Returns:
        str: INSERT statement
    """
    column_list = ", ".join(column.upper() for column in columns)
    values = ",\n    ".join(
        "(" + ", ".join(f":{column}_{index}" for column in columns) + ")"
        for index in range(row_count)
    )
    return f"INSERT INTO {table} ({column_list})\nVALUES\n    {values}"


def build_insert_params(columns: Sequence[str], rows: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    params = {}
    for index, row in enumerate(rows):
        for column in columns:
            params[f"{column}_{index}"] = row.get(column)
    return params


class BundleReferenceRepository(BaseRepository[BundleReferenceRow]):
    """
    Repository for precomputed bundle SKUs and their components.
    """

    def get_all(self, *args, **kwargs) -> List[BundleReferenceRow]:
        return [BundleReferenceRow.from_record(record) for record in self._records(self.get_raw_data())]

    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        return self._execute_query(REFERENCE_QUERY)

    def find_by_prints(self, category_code: str, size: str, print_codes: Sequence[str]) -> List[BundleReferenceRow]:
        """
        Get reference rows of a category and size whose product code contains
        every given print code (case-insensitive).

        Args:
            category_code (str): Bundle category as stored in the reference
            size (str): Size name
            print_codes (Sequence[str]): Print codes that must all appear

        Returns:
            List[BundleReferenceRow]: Matching component rows
        """
        query = REFERENCE_BY_CATEGORY_SIZE_QUERY
        params: Dict[str, Any] = {"category_code": category_code, "size": size}
        for index, code in enumerate(print_codes):
            query += f"  AND PRODUCT_CODE ILIKE :print_code_{index}\n"
            params[f"print_code_{index}"] = f"%{code}%"
        query += "ORDER BY PRODUCT_CODE"

        df = self._execute_query(query, params)
        return [BundleReferenceRow.from_record(record) for record in self._records(df)]

    def find_component(self, product_code: str, component_product_code: str) -> Optional[BundleReferenceRow]:
        df = self._execute_query(
            REFERENCE_COMPONENT_QUERY,
            {"product_code": product_code, "component_product_code": component_product_code}
        )
        records = self._records(df)
        return BundleReferenceRow.from_record(records[0]) if records else None

    def create(self, row: BundleReferenceRow) -> BundleReferenceRow:
        """
        Insert one reference component row, enabled.
        """
        if not row.id:
            row.id = self._new_id()
        if row.enabled is None:
            row.enabled = True
        self.insert_many([asdict(row)])
        return row

    def insert_many(self, rows: Sequence[Dict[str, Any]], batch_size: int = SEED_BATCH_SIZE) -> int:
        """
        Insert reference rows in batches.

        Args:
            rows (Sequence[Dict[str, Any]]): Rows keyed by column name
            batch_size (int): Rows per INSERT statement

        Returns:
            int: Number of inserted rows
        """
        now = utc_now()
        columns = REFERENCE_COLUMNS + ["created_at", "updated_at"]
        inserted = 0

        for start in range(0, len(rows), batch_size):
            batch = []
            for row in rows[start:start + batch_size]:
                record = {column: row.get(column) for column in REFERENCE_COLUMNS}
                record["id"] = record["id"] or self._new_id()
                record["created_at"] = now
                record["updated_at"] = now
                batch.append(record)

            statement = build_insert_statement(BUNDLE_REFERENCE_TABLE, columns, len(batch))
            inserted += self._execute_statement(statement, build_insert_params(columns, batch))
            logger.info(f"Inserted bundle reference batch {start // batch_size + 1} ({len(batch)} rows).")

        return inserted

    def clear(self) -> int:
        count = self._execute_statement(CLEAR_REFERENCE)
        logger.info(f"Cleared {count} bundle reference rows.")
        return count


class BundleItemMasterRepository(BaseRepository[Dict[str, Any]]):
    """
    Repository for bundle item master rows (plain dicts keyed by column).
    """

    def get_all(self, day: Optional[Union[str, date]] = None) -> List[Dict[str, Any]]:
        """
        Get bundle item master rows, newest first.

        Args:
            day (Optional[Union[str, date]]): Only rows created on this business day

        Returns:
            List[Dict[str, Any]]: One dict per row
        """
        return self._records(self.get_raw_data(day))

    def get_raw_data(self, day: Optional[Union[str, date]] = None) -> pd.DataFrame:
        where, params = self._day_filter(day)
        return self._execute_query(BUNDLE_ITEMS_QUERY.format(where=where), params)

    def insert(self, row: Dict[str, Any]) -> int:
        now = utc_now()
        record = dict(row)
        record.setdefault("id", self._new_id())
        record.setdefault("created_at", now)
        record.setdefault("updated_at", now)
        columns = list(record)
        statement = build_insert_statement(BUNDLE_ITEM_MASTER_TABLE, columns)
        return self._execute_statement(statement, build_insert_params(columns, [record]))

    def delete(self, day: Optional[Union[str, date]] = None) -> int:
        """
        Delete rows created on one business day, or every row when no day is given.

        Returns:
            int: Number of deleted rows
        """
        where, params = self._day_filter(day)
        count = self._execute_statement(DELETE_BUNDLE_ITEMS.format(where=where), params)
        logger.info(f"Deleted {count} bundle item master rows.")
        return count

    @staticmethod
    def _day_filter(day: Optional[Union[str, date]]):
        if not day:
            return "", None
        start_at, end_at = business_day_bounds(day)
        return DAY_FILTER, {"start_at": start_at, "end_at": end_at}
