"""
Weight repository for the PRODUCT_WEIGHTS table.
"""
from typing import List, Optional
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.catalog import ProductWeight
from orange_sugar_inventory.config.database_config import (
    PRODUCT_WEIGHTS_TABLE,
    CATEGORIES_TABLE,
    SIZES_TABLE
)

WEIGHTS_QUERY = f"""
SELECT w.ID, w.CATEGORY_ID, w.SIZE_ID, w.WEIGHT, c.CATEGORY_NAME, s.SIZE_NAME
FROM {PRODUCT_WEIGHTS_TABLE} w
LEFT JOIN {CATEGORIES_TABLE} c ON c.ID = w.CATEGORY_ID
LEFT JOIN {SIZES_TABLE} s ON s.ID = w.SIZE_ID
"""

WEIGHT_FOR_QUERY = f"""
SELECT ID, CATEGORY_ID, SIZE_ID, WEIGHT
FROM {PRODUCT_WEIGHTS_TABLE}
WHERE CATEGORY_ID = :category_id AND SIZE_ID = :size_id
LIMIT 1
"""

INSERT_WEIGHT = f"""
INSERT INTO {PRODUCT_WEIGHTS_TABLE} (ID, CATEGORY_ID, SIZE_ID, WEIGHT)
VALUES (:id, :category_id, :size_id, :weight)
"""

UPDATE_WEIGHT = f"UPDATE {PRODUCT_WEIGHTS_TABLE} SET WEIGHT = :weight WHERE ID = :id"

DELETE_WEIGHT = f"DELETE FROM {PRODUCT_WEIGHTS_TABLE} WHERE ID = :id"


class WeightRepository(BaseRepository[ProductWeight]):
    """
    Repository for per category + size shipping weights.
    """

    def get_all(self, *args, **kwargs) -> List[ProductWeight]:
        return [
            ProductWeight(
                id=record["id"],
                category_id=record["category_id"],
                size_id=record["size_id"],
                weight=record["weight"],
                category_name=record.get("category_name"),
                size_name=record.get("size_name")
            )
            for record in self._records(self.get_raw_data())
        ]

    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        return self._execute_query(WEIGHTS_QUERY)

    def find(self, category_id: str, size_id: Optional[str]) -> Optional[ProductWeight]:
        """
        Get the weight for a category and size.

        Args:
            category_id (str): Category ID
            size_id (Optional[str]): Size ID

        Returns:
            Optional[ProductWeight]: The weight, or None when not set
        """
        if not size_id:
            return None
        records = self._records(
            self._execute_query(WEIGHT_FOR_QUERY, {"category_id": category_id, "size_id": size_id})
        )
        if not records:
            return None
        record = records[0]
        return ProductWeight(
            id=record["id"],
            category_id=record["category_id"],
            size_id=record["size_id"],
            weight=record["weight"]
        )

    def grams_for(self, category_id: str, size_id: Optional[str]) -> Optional[float]:
        weight = self.find(category_id, size_id)
        return weight.weight if weight else None

    def create(self, category_id: str, size_id: str, weight: float) -> ProductWeight:
        record = ProductWeight(id=self._new_id(), category_id=category_id, size_id=size_id, weight=weight)
        self._execute_statement(
            INSERT_WEIGHT,
            {"id": record.id, "category_id": category_id, "size_id": size_id, "weight": weight}
        )
        return record

    def update(self, weight_id: str, weight: float) -> int:
        return self._execute_statement(UPDATE_WEIGHT, {"id": weight_id, "weight": weight})

    def delete(self, weight_id: str) -> int:
        return self._execute_statement(DELETE_WEIGHT, {"id": weight_id})
