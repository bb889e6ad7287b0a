"""
Base exporter interface and the export table layouts.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import os
import pandas as pd
from orange_sugar_inventory.config.app_config import (
    BUNDLE_ITEM_MASTER_HEADERS,
    DEFAULT_TAX_CLASS,
    ITEM_MASTER_COLUMNS,
    ITEM_MASTER_HEADERS,
    PURCHASE_ORDER_HEADERS
)
from orange_sugar_inventory.data.models.orders import PurchaseOrder
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

# Bundle export columns rendered as TRUE/FALSE
BUNDLE_BOOLEAN_COLUMNS = ("requires_customization", "enabled", "resync_inventory", "expirable")

# Export name -> (file name prefix, sheet name)
EXPORTS = {
    "item_master": ("Item_Master", "Item Master"),
    "bundle_item_master": ("bundle_item_master", "Bundle Item Master"),
    "purchase_orders": ("purchase_orders", "Purchase Orders"),
}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def item_master_frame(rows: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """
    Lay out item master rows in the marketplace column order.

    Missing values become empty strings.

    Args:
        rows (Sequence[Dict[str, Any]]): Item master rows keyed by column

    Returns:
        pd.DataFrame: One column per header
    """
    data = [
        ["" if _is_missing(row.get(column)) else row.get(column) for column in ITEM_MASTER_COLUMNS]
        for row in rows
    ]
    return pd.DataFrame(data, columns=ITEM_MASTER_HEADERS)


def bundle_item_master_frame(rows: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """
    Lay out bundle item master rows.

    Booleans become TRUE/FALSE; empty, zero and missing values become empty
    strings.

    Args:
        rows (Sequence[Dict[str, Any]]): Bundle item master rows keyed by column

    Returns:
        pd.DataFrame: One column per header
    """
    data = []
    for row in rows:
        record = {}
        for column, header in BUNDLE_ITEM_MASTER_HEADERS.items():
            value = row.get(column)
            if _is_missing(value):
                record[header] = ""
            elif column in BUNDLE_BOOLEAN_COLUMNS:
                record[header] = "TRUE" if value else "FALSE"
            else:
                record[header] = value if value else ""
        data.append(record)
    return pd.DataFrame(data, columns=list(BUNDLE_ITEM_MASTER_HEADERS.values()))


def purchase_order_frame(orders: Sequence[PurchaseOrder]) -> pd.DataFrame:
    """
    Lay out purchase orders for the PO upload.

    Args:
        orders (Sequence[PurchaseOrder]): Orders to export

    Returns:
        pd.DataFrame: SKU, quantity, cost price, discount and tax class
    """
    data = [
        [order.sku, order.quantity, order.cost_price, order.discount, order.tax_class or DEFAULT_TAX_CLASS]
        for order in orders
    ]
    return pd.DataFrame(data, columns=PURCHASE_ORDER_HEADERS)


FRAME_BUILDERS = {
    "item_master": item_master_frame,
    "bundle_item_master": bundle_item_master_frame,
    "purchase_orders": purchase_order_frame,
}


class BaseExporter(ABC):
    """
    Abstract base class for exporters that write export tables to files.
    """

    extension = ""

    @abstractmethod
    def write(self, df: pd.DataFrame, output_path: str, sheet_name: Optional[str] = None) -> str:
        """
        Write a DataFrame to a file.

        Args:
            df (pd.DataFrame): The table to write
            output_path (str): Destination file
            sheet_name (Optional[str]): Sheet name, for formats that have sheets

        Returns:
            str: Path to the written file
        """
        pass

    def export(self, export_name: str, data: Sequence[Any], output_dir: str, label: str) -> str:
        """
        Build an export table and write it as {prefix}_{label}.{extension}.

        Args:
            export_name (str): One of EXPORTS
            data (Sequence[Any]): Rows or orders to export
            output_dir (str): Directory for the file
            label (str): Usually the selected date

        Returns:
            str: Path to the written file
        """
        if export_name not in EXPORTS:
            raise ValueError(f"Unknown export: {export_name}. Choose from {', '.join(EXPORTS)}")

        prefix, sheet_name = EXPORTS[export_name]
        df = FRAME_BUILDERS[export_name](data)

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"{prefix}_{label}.{self.extension}")
        self.write(df, output_path, sheet_name)
        logger.info(f"Exported {len(df)} {export_name} rows to {output_path}")
        return output_path

    @staticmethod
    def export_names() -> List[str]:
        return list(EXPORTS)
