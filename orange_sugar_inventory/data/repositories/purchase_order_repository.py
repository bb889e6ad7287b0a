"""
Purchase order repository for the PURCHASE_ORDERS table.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Union
import pandas as pd
from orange_sugar_inventory.data.repositories.base_repository import BaseRepository
from orange_sugar_inventory.data.models.orders import PurchaseOrder
from orange_sugar_inventory.config.app_config import DEFAULT_TAX_CLASS
from orange_sugar_inventory.config.database_config import PURCHASE_ORDERS_TABLE
from orange_sugar_inventory.utils.date_helpers import to_date, utc_now
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

ORDER_COLUMNS = """
    ID, SKU, CATEGORY, PRINT_NAME, SIZE, COST_PRICE, DISCOUNT,
    QUANTITY, TAX_CLASS, PO_DATE, CREATED_AT
"""

ORDERS_BY_DATE_QUERY = f"""
SELECT {ORDER_COLUMNS}
FROM {PURCHASE_ORDERS_TABLE}
WHERE PO_DATE = :po_date
ORDER BY CREATED_AT DESC
"""

ORDER_BY_ID_QUERY = f"SELECT {ORDER_COLUMNS} FROM {PURCHASE_ORDERS_TABLE} WHERE ID = :id"

INSERT_ORDER = f"""
INSERT INTO {PURCHASE_ORDERS_TABLE}
    (ID, SKU, CATEGORY, PRINT_NAME, SIZE, COST_PRICE, DISCOUNT, QUANTITY, TAX_CLASS, PO_DATE, CREATED_AT)
VALUES
    (:id, :sku, :category, :print_name, :size, :cost_price, :discount, :quantity, :tax_class, :po_date, :created_at)
"""

# Columns a user may edit after entry
UPDATABLE_COLUMNS = ("sku", "category", "print_name", "size", "quantity", "cost_price")

DELETE_ORDER = f"DELETE FROM {PURCHASE_ORDERS_TABLE} WHERE ID = :id"

DELETE_ORDERS_BY_DATE = f"DELETE FROM {PURCHASE_ORDERS_TABLE} WHERE PO_DATE = :po_date"


class PurchaseOrderRepository(BaseRepository[PurchaseOrder]):
    """
    Repository for purchase order lines.
    """

    def get_all(self, po_date: Union[str, date]) -> List[PurchaseOrder]:
        """
        Get the orders of one PO date, newest first.

        Args:
            po_date (Union[str, date]): The PO date

        Returns:
            List[PurchaseOrder]: The orders
        """
        return [self._to_order(record) for record in self._records(self.get_raw_data(po_date))]

    def get_raw_data(self, po_date: Union[str, date]) -> pd.DataFrame:
        logger.info(f"Fetching purchase orders for {po_date}...")
        return self._execute_query(ORDERS_BY_DATE_QUERY, {"po_date": to_date(po_date)})

    def get_by_id(self, order_id: str) -> Optional[PurchaseOrder]:
        records = self._records(self._execute_query(ORDER_BY_ID_QUERY, {"id": order_id}))
        return self._to_order(records[0]) if records else None

    def create(self, order: PurchaseOrder) -> PurchaseOrder:
        if not order.id:
            order.id = self._new_id()
        if order.created_at is None:
            order.created_at = utc_now()
        self._execute_statement(INSERT_ORDER, {
            "id": order.id,
            "sku": order.sku,
            "category": order.category,
            "print_name": order.print_name,
            "size": order.size,
            "cost_price": order.cost_price,
            "discount": order.discount,
            "quantity": order.quantity,
            "tax_class": order.tax_class,
            "po_date": to_date(order.po_date),
            "created_at": order.created_at,
        })
        logger.info(f"Created purchase order {order.sku} x {order.quantity}.")
        return order

    def update(self, order_id: str, changes: Dict[str, Any]) -> int:
        """
        Update the editable columns of an order.

        Args:
            order_id (str): Order ID
            changes (Dict[str, Any]): Column -> new value

        Returns:
            int: Number of updated rows
        """
        changes = {key: value for key, value in changes.items() if key in UPDATABLE_COLUMNS}
        if not changes:
            return 0
        assignments = ", ".join(f"{key.upper()} = :{key}" for key in changes)
        statement = f"UPDATE {PURCHASE_ORDERS_TABLE} SET {assignments} WHERE ID = :id"
        return self._execute_statement(statement, {**changes, "id": order_id})

    def delete(self, order_id: str) -> int:
        return self._execute_statement(DELETE_ORDER, {"id": order_id})

    def delete_for_date(self, po_date: Union[str, date]) -> int:
        return self._execute_statement(DELETE_ORDERS_BY_DATE, {"po_date": to_date(po_date)})

    @staticmethod
    def _to_order(record: Dict[str, Any]) -> PurchaseOrder:
        return PurchaseOrder(
            id=record["id"],
            sku=record["sku"],
            category=record.get("category"),
            print_name=record.get("print_name"),
            size=record.get("size"),
            cost_price=float(record.get("cost_price") or 0),
            quantity=int(record.get("quantity") or 0),
            po_date=to_date(record["po_date"]),
            discount=float(record.get("discount") or 0),
            tax_class=int(record.get("tax_class") or DEFAULT_TAX_CLASS),
            created_at=record.get("created_at")
        )
