import os
from datetime import date
from io import BytesIO

import numpy as np
import pandas as pd
import pytest
from openpyxl import load_workbook

from orange_sugar_inventory.config.app_config import ITEM_MASTER_HEADERS
from orange_sugar_inventory.data.models.orders import PurchaseOrder
from orange_sugar_inventory.exporters.base_exporter import (
    BaseExporter,
    bundle_item_master_frame,
    item_master_frame,
    purchase_order_frame
)
from orange_sugar_inventory.exporters.csv_exporter import CSVExporter
from orange_sugar_inventory.exporters.xlsx_exporter import XLSXExporter


def make_order(**overrides):
    values = dict(
        id="o1", sku="BUN_ROMP_0-3M", category="Romper", print_name="Bunny", size="0-3M",
        cost_price=200.0, quantity=3, po_date=date(2024, 5, 1)
    )
    values.update(overrides)
    return PurchaseOrder(**values)


class TestFrames:
    """Export table layouts"""

    def test_item_master_headers(self):
        df = item_master_frame([{"product_code": "A", "name": "Romper", "weight_gms": np.nan, "style": "Bunny"}])
        assert list(df.columns) == ITEM_MASTER_HEADERS
        assert len(df.columns) == 47
        row = df.iloc[0]
        assert row["Product Code*"] == "A"
        assert row["Weight (gms)"] == ""
        assert row["Style"] == "Bunny"

    def test_bundle_booleans_and_blanks(self):
        df = bundle_item_master_frame([{"product_code": "GS_A", "enabled": True, "expirable": False, "mrp": 0, "ean": None}])
        row = df.iloc[0]
        assert row["Product Code"] == "GS_A"
        assert row["Enabled"] == "TRUE"
        assert row["Expirable"] == "FALSE"
        assert row["MRP"] == ""
        assert row["EAN"] == ""
        assert "Style" not in df.columns

    def test_purchase_order_layout(self):
        df = purchase_order_frame([make_order(tax_class=0)])
        assert list(df.columns) == ["Item SKU code", "Quantity", "Cost Price", "Discount", "Tax Class"]
        assert df.iloc[0].tolist() == ["BUN_ROMP_0-3M", 3, 200.0, 0.0, 5]

    def test_empty_frames_keep_headers(self):
        assert list(purchase_order_frame([]).columns)[0] == "Item SKU code"
        assert item_master_frame([]).empty


class TestExporters:
    """Writing export files"""

    def test_csv_file(self, tmp_path):
        path = CSVExporter().export("purchase_orders", [make_order()], str(tmp_path), "2024-05-01")
        assert os.path.basename(path) == "purchase_orders_2024-05-01.csv"
        df = pd.read_csv(path)
        assert df["Item SKU code"].tolist() == ["BUN_ROMP_0-3M"]

    def test_xlsx_file(self, tmp_path):
        path = XLSXExporter().export("item_master", [{"product_code": "A", "name": "Romper"}], str(tmp_path / "out"), "2024-05-01")
        assert path.endswith("Item_Master_2024-05-01.xlsx")
        wb = load_workbook(path)
        assert wb.sheetnames == ["Item Master"]
        sheet = wb["Item Master"]
        assert sheet["A1"].value == "Category Code*"
        assert sheet["B2"].value == "A"

    def test_xlsx_column_widths_capped(self):
        df = pd.DataFrame({"Name": ["x" * 200]})
        wb = load_workbook(BytesIO(XLSXExporter().to_bytes(df, "Sheet")))
        assert wb["Sheet"].column_dimensions["A"].width == 50

    def test_csv_bytes(self):
        data = CSVExporter.to_bytes(purchase_order_frame([make_order()]))
        assert data.decode("utf-8").startswith("Item SKU code,Quantity")

    def test_unknown_export(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown export"):
            CSVExporter().export("nope", [], str(tmp_path), "x")

    def test_export_names(self):
        assert BaseExporter.export_names() == ["item_master", "bundle_item_master", "purchase_orders"]
