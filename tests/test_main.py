import os

import pandas as pd
import pytest

from conftest import FakeConnector
from orange_sugar_inventory.main import InventoryApp


@pytest.fixture
def app():
    return InventoryApp(connector=FakeConnector())


class TestInventoryApp:
    """Application wiring"""

    def test_services_share_connector(self, app):
        assert app.purchase_orders.purchase_order_repository.connector is app.connector
        assert app.bundles.reference_repository.connector is app.connector

    def test_export_purchase_orders(self, app, tmp_path):
        path = app.export("purchase_orders", str(tmp_path), day="2024-05-01", file_format="csv")
        assert os.path.basename(path) == "purchase_orders_2024-05-01.csv"
        df = pd.read_csv(path)
        assert list(df.columns) == ["Item SKU code", "Quantity", "Cost Price", "Discount", "Tax Class"]
        assert df.empty

    def test_export_bundle_item_master_filters_by_day(self, app, tmp_path):
        app.export("bundle_item_master", str(tmp_path), day="2024-05-01")
        query, params = app.connector.queries[0]
        assert "CREATED_AT >= :start_at" in query
        assert params is not None

    def test_unknown_export(self, app, tmp_path):
        with pytest.raises(ValueError):
            app.export("nope", str(tmp_path))

    def test_seeder(self, app):
        assert app.seeder().reference_repository is app.bundle_reference_repository
