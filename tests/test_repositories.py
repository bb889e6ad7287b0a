from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from orange_sugar_inventory.data.connectors.base_connector import format_query, format_value
from orange_sugar_inventory.data.models.catalog import Product
from orange_sugar_inventory.data.models.orders import PurchaseOrder
from orange_sugar_inventory.data.repositories.bundle_repository import (
    BundleItemMasterRepository,
    BundleReferenceRepository,
    build_insert_params,
    build_insert_statement
)
from orange_sugar_inventory.data.repositories.item_master_repository import (
    ItemMasterRepository,
    build_upsert_statement
)
from orange_sugar_inventory.data.repositories.product_repository import ProductRepository
from orange_sugar_inventory.data.repositories.purchase_order_repository import PurchaseOrderRepository
from orange_sugar_inventory.data.repositories.size_repository import SizeRepository


class TestFormatValue:
    """SQL literal rendering"""

    @pytest.mark.parametrize("value, expected", [
        (None, "NULL"),
        (float("nan"), "NULL"),
        (True, "TRUE"),
        (False, "FALSE"),
        (5, "5"),
        (2.5, "2.5"),
        (np.int64(7), "7"),
        ("Bunny", "'Bunny'"),
        ("Kid's Tee", "'Kid''s Tee'"),
        (date(2024, 5, 1), "'2024-05-01'"),
        (["a", "b"], "('a', 'b')"),
        ([], "(NULL)"),
    ])
    def test_literals(self, value, expected):
        assert format_value(value) == expected

    def test_datetime(self):
        assert format_value(datetime(2024, 5, 1, 10, 30)) == "'2024-05-01T10:30:00'"

    def test_backslash_escaped(self):
        assert format_value("A\\B") == "'A\\\\B'"
        assert format_value("O\\'Neil") == "'O\\\\''Neil'"


class TestFormatQuery:
    """Placeholder substitution"""

    def test_substitutes_named_placeholders(self):
        query = "SELECT * FROM T WHERE A = :a AND B IN :b"
        assert format_query(query, {"a": "x", "b": [1, 2]}) == "SELECT * FROM T WHERE A = 'x' AND B IN (1, 2)"

    def test_leaves_unknown_placeholders(self):
        assert format_query("WHERE A = :a AND B = :b", {"a": 1}) == "WHERE A = 1 AND B = :b"

    def test_leaves_casts_alone(self):
        assert format_query("SELECT :a::DATE", {"a": "2024-05-01"}) == "SELECT '2024-05-01'::DATE"

    def test_no_params(self):
        assert format_query("SELECT 1") == "SELECT 1"

    def test_values_are_not_resubstituted(self):
        assert format_query("VALUES (:a, :b)", {"a": ":b", "b": "x"}) == "VALUES (':b', 'x')"


class TestStatementBuilders:
    """Generated INSERT and MERGE statements"""

    def test_insert_statement(self):
        statement = build_insert_statement("DB.S.T", ["product_code", "size"], row_count=2)
        assert "INSERT INTO DB.S.T (PRODUCT_CODE, SIZE)" in statement
        assert "(:product_code_0, :size_0)" in statement
        assert "(:product_code_1, :size_1)" in statement

    def test_insert_params(self):
        params = build_insert_params(["product_code", "size"], [{"product_code": "A"}, {"product_code": "B", "size": "S"}])
        assert params == {"product_code_0": "A", "size_0": None, "product_code_1": "B", "size_1": "S"}

    def test_upsert_keeps_created_at_on_update(self):
        statement = build_upsert_statement(["product_code", "name", "created_at"])
        update_clause = statement.split("WHEN MATCHED THEN UPDATE SET")[1].split("WHEN NOT MATCHED")[0]
        assert "t.NAME = s.NAME" in update_clause
        assert "CREATED_AT" not in update_clause
        assert "PRODUCT_CODE" not in update_clause
        assert "INSERT (PRODUCT_CODE, NAME, CREATED_AT)" in statement


class TestProductRepository:
    """Product lookups against a fake connector"""

    def test_find_with_prints_groups_prints_in_order(self, fake_connector):
        fake_connector.results.append(pd.DataFrame([
            {"id": "p1", "category_id": "c", "product_code": "A", "cost_price": 100.0, "print_id": "x", "position": 1},
            {"id": "p1", "category_id": "c", "product_code": "A", "cost_price": 100.0, "print_id": "y", "position": 2},
            {"id": "p2", "category_id": "c", "product_code": "B", "cost_price": np.nan, "print_id": None, "position": None},
        ]))
        products = ProductRepository(fake_connector).find_with_prints("c", "s")
        assert [p.product_code for p in products] == ["A", "B"]
        assert products[0].print_ids == ["x", "y"]
        assert products[1].print_ids == []
        assert products[1].cost_price is None

    def test_create_links_prints_with_positions(self, fake_connector):
        product = Product(id="", category_id="c", product_code="A")
        created = ProductRepository(fake_connector).create(product, ["x", "y"])
        assert created.id
        assert created.print_ids == ["x", "y"]
        link_params = [params for _, params in fake_connector.statements[1:]]
        assert [(p["print_id"], p["position"]) for p in link_params] == [("x", 1), ("y", 2)]


class TestPurchaseOrderRepository:
    """Purchase order persistence"""

    def test_update_ignores_unknown_columns(self, fake_connector):
        repository = PurchaseOrderRepository(fake_connector)
        repository.update("o1", {"quantity": 3, "po_date": "2024-01-01"})
        statement, params = fake_connector.statements[0]
        assert "QUANTITY = :quantity" in statement
        assert "PO_DATE" not in statement
        assert params == {"quantity": 3, "id": "o1"}

    def test_update_without_changes(self, fake_connector):
        assert PurchaseOrderRepository(fake_connector).update("o1", {"id": "x"}) == 0
        assert fake_connector.statements == []

    def test_missing_tax_class_uses_default(self, fake_connector):
        fake_connector.results.append(pd.DataFrame([{
            "id": "o1", "sku": "A", "category": "Romper", "print_name": "Bunny", "size": "S",
            "cost_price": 10.0, "quantity": 2, "po_date": date(2024, 5, 1), "discount": None, "tax_class": None,
        }]))
        order = PurchaseOrderRepository(fake_connector).get_by_id("o1")
        assert isinstance(order, PurchaseOrder)
        assert order.tax_class == 5
        assert order.discount == 0.0

    def test_create_sets_id_and_timestamp(self, fake_connector):
        order = PurchaseOrder(
            id="", sku="A", category="Romper", print_name="Bunny", size="S",
            cost_price=10.0, quantity=1, po_date=date(2024, 5, 1)
        )
        created = PurchaseOrderRepository(fake_connector).create(order)
        assert created.id
        assert created.created_at is not None


class TestSizeRepository:
    """Size listing"""

    def test_sorted_by_display_order(self, fake_connector):
        fake_connector.results.append(pd.DataFrame([
            {"id": "2", "size_name": "2-3Y"},
            {"id": "1", "size_name": "0-3M"},
        ]))
        sizes = SizeRepository(fake_connector).get_all()
        assert [s.size_name for s in sizes] == ["0-3M", "2-3Y"]

    def test_empty_print_list_skips_query(self, fake_connector):
        assert SizeRepository(fake_connector).get_all("cat", []) == []
        assert fake_connector.queries == []

    def test_print_ids_are_deduplicated(self, fake_connector):
        SizeRepository(fake_connector).get_all("cat", ["a", "a", "b"])
        _, params = fake_connector.queries[0]
        assert params["print_ids"] == ["a", "b"]
        assert params["print_count"] == 2


class TestBundleRepositories:
    """Bundle reference and bundle item master tables"""

    def test_find_by_prints_requires_every_code(self, fake_connector):
        BundleReferenceRepository(fake_connector).find_by_prints("GS", "S", ["BUN", "ROC"])
        query, params = fake_connector.queries[0]
        assert "PRODUCT_CODE ILIKE :print_code_0" in query
        assert "PRODUCT_CODE ILIKE :print_code_1" in query
        assert params["print_code_0"] == "%BUN%"
        assert params["print_code_1"] == "%ROC%"

    def test_reference_rows_listed(self, fake_connector):
        fake_connector.results.append(pd.DataFrame([
            {"product_code": "GS_BUN_ROC_0-3M", "size": "0-3M", "component_quantity": 1, "created_at": None},
            {"product_code": "GS_SKY_0-3M", "size": np.nan, "component_quantity": 2, "created_at": None},
        ]))
        rows = BundleReferenceRepository(fake_connector).get_all()
        assert [r.product_code for r in rows] == ["GS_BUN_ROC_0-3M", "GS_SKY_0-3M"]
        assert rows[1].size is None
        assert "ORDER BY PRODUCT_CODE" in fake_connector.queries[0][0]

    def test_insert_many_batches(self, fake_connector):
        rows = [{"product_code": f"P{i}"} for i in range(5)]
        BundleReferenceRepository(fake_connector).insert_many(rows, batch_size=2)
        assert len(fake_connector.statements) == 3
        _, last_params = fake_connector.statements[-1]
        assert last_params["product_code_0"] == "P4"
        assert "product_code_1" not in last_params

    def test_day_filter(self, fake_connector):
        BundleItemMasterRepository(fake_connector).get_all("2024-05-01")
        query, params = fake_connector.queries[0]
        assert "CREATED_AT >= :start_at" in query
        assert params["start_at"] == datetime.fromisoformat("2024-04-30T18:30:00+00:00")

    def test_no_day_lists_everything(self, fake_connector):
        BundleItemMasterRepository(fake_connector).get_all()
        query, params = fake_connector.queries[0]
        assert "WHERE" not in query


class TestItemMasterRepository:
    """Item master upserts"""

    def test_upsert_defaults(self, fake_connector):
        ItemMasterRepository(fake_connector).upsert({"product_code": "A", "name": "Romper"})
        _, params = fake_connector.statements[0]
        assert params["is_visible"] is True
        assert params["created_at"] is not None
