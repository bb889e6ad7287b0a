import os
import sys
import pathlib
import tempfile
from unittest.mock import MagicMock

import pandas as pd
import pytest

# Add project root to path for imports
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the working tree
os.environ.setdefault("INVENTORY_LOG_DIR", tempfile.mkdtemp(prefix="inventory_logs_"))

from orange_sugar_inventory.data.connectors.base_connector import BaseConnector
from orange_sugar_inventory.data.models.catalog import Category, Print, Product, Size
from orange_sugar_inventory.data.models.item_master import IndividualProduct


class FakeConnector(BaseConnector):
    """Records statements and answers queries from a queue of DataFrames."""

    def __init__(self, results=None):
        self.results = list(results or [])
        self.queries = []
        self.statements = []

    def connect(self):
        return None

    def disconnect(self):
        return None

    def execute_query(self, query, params=None):
        self.queries.append((query, params))
        return self.results.pop(0) if self.results else pd.DataFrame()

    def execute_statement(self, statement, params=None):
        self.statements.append((statement, params))
        return 1


@pytest.fixture
def fake_connector():
    return FakeConnector()


@pytest.fixture
def romper():
    return Category(
        id="cat-romper",
        category_name="Romper",
        category_code="ROMP",
        sku_schema=1,
        hsn_code="6111",
        product_name_prefix="Romper |",
        category_type="single"
    )


@pytest.fixture
def gift_set():
    return Category(
        id="cat-gift",
        category_name="Gift Set",
        category_code="GS",
        sku_schema=4,
        hsn_code="6209",
        size_in_product_name=True,
        category_type="bundle"
    )


@pytest.fixture
def bunny():
    return Print(id="print-bunny", official_print_name="Bunny", print_code="BUN")


@pytest.fixture
def rocket():
    return Print(id="print-rocket", official_print_name="Rocket", print_code="ROC")


@pytest.fixture
def sizes():
    return [Size(id="size-0-3", size_name="0-3M"), Size(id="size-3-6", size_name="3-6M")]


@pytest.fixture
def bundle_products():
    return [
        IndividualProduct(
            category_id="cat-romper",
            category_code="ROMP",
            print_id="print-rocket",
            print_code="ROC",
            print_name="Rocket"
        ),
        IndividualProduct(
            category_id="cat-bib",
            category_code="BIB",
            print_id="print-bunny",
            print_code="BUN",
            print_name="Bunny"
        ),
    ]


def make_product(**overrides):
    values = dict(
        id="prod-1",
        category_id="cat-romper",
        product_code="BUN_ROMP_0-3M",
        name="Romper | Bunny",
        size_id="size-0-3",
        cost_price=200.0,
        base_price=None,
        mrp=599.0,
        hsn_code="6111",
        print_ids=["print-bunny"],
    )
    values.update(overrides)
    return Product(**values)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def repos():
    """MagicMock repositories keyed by name."""
    return {
        name: MagicMock(name=name)
        for name in (
            "category", "print", "size", "product", "weight",
            "purchase_order", "item_master", "bundle_reference", "bundle_item_master"
        )
    }
