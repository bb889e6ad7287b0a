from datetime import date
import logging

import pytest

from orange_sugar_inventory.data.models.catalog import Category
from orange_sugar_inventory.data.models.orders import PurchaseOrder, SizeQuantity
from orange_sugar_inventory.exceptions import DeleteWindowError, NotFoundError, ValidationError
from orange_sugar_inventory.services.purchase_order_service import (
    PurchaseOrderService,
    category_sku,
    check_delete_window
)

TODAY = date(2024, 5, 10)


def make_order(**overrides):
    values = dict(
        id="o1", sku="BUN_ROMP_0-3M", category="Romper", print_name="Bunny", size="0-3M",
        cost_price=200.0, quantity=2, po_date=TODAY
    )
    values.update(overrides)
    return PurchaseOrder(**values)


@pytest.fixture
def service(repos):
    repos["purchase_order"].create.side_effect = lambda order: order
    return PurchaseOrderService(
        repos["category"], repos["print"], repos["size"], repos["product"], repos["purchase_order"]
    )


class TestDeleteWindow:
    """Orders can only be deleted for a few days"""

    def test_inside_window(self):
        check_delete_window("2024-05-05", today=TODAY)

    def test_outside_window(self):
        with pytest.raises(DeleteWindowError, match="older than 5 days"):
            check_delete_window("2024-05-04", today=TODAY)

    def test_delete_order_checks_window(self, service, repos):
        repos["purchase_order"].get_by_id.return_value = make_order(po_date=date(2024, 4, 1))
        with pytest.raises(DeleteWindowError):
            service.delete_order("o1", today=TODAY)
        repos["purchase_order"].delete.assert_not_called()

    def test_delete_order(self, service, repos):
        repos["purchase_order"].get_by_id.return_value = make_order()
        repos["purchase_order"].delete.return_value = 1
        assert service.delete_order("o1", today=TODAY) == 1

    def test_delete_missing_order(self, service, repos):
        repos["purchase_order"].get_by_id.return_value = None
        with pytest.raises(NotFoundError):
            service.delete_order("nope", today=TODAY)

    def test_delete_orders_for_date(self, service, repos):
        repos["purchase_order"].delete_for_date.return_value = 3
        assert service.delete_orders_for_date("2024-05-09", today=TODAY) == 3


class TestSkuLookup:
    """Stored SKUs win over generated ones"""

    def test_exact_print_match(self, service, repos, product_factory):
        repos["product"].find_with_prints.return_value = [
            product_factory(product_code="WRONG", print_ids=["print-rocket", "print-bunny"]),
            product_factory(product_code="RIGHT", cost_price=150.0, print_ids=["print-bunny", "print-rocket"]),
        ]
        assert service.lookup_product_sku("cat-romper", ["print-bunny", "print-rocket"], "size-0-3") == ("RIGHT", 150.0)

    def test_subset_does_not_match(self, service, repos, product_factory):
        repos["product"].find_with_prints.return_value = [product_factory(print_ids=["print-bunny", "print-rocket"])]
        assert service.lookup_product_sku("cat-romper", ["print-bunny"], "size-0-3") is None

    def test_resolve_falls_back_to_generated_sku(self, service, repos, romper, bunny):
        repos["product"].find_with_prints.return_value = []
        assert service.resolve_sku(romper, [bunny], "size-0-3", "0-3M") == ("BUN_ROMP_0-3M", None)

    def test_category_sku_strips_whitespace(self, romper):
        romper.category_code = " RO MP "
        assert category_sku(romper, [" BUN "], "Standard") == "BUN_ROMP"

    def test_unknown_schema_is_logged(self, romper, caplog):
        romper.sku_schema = 42
        with caplog.at_level(logging.WARNING):
            assert category_sku(romper, ["BUN"], None) == "BUN_ROMP"
        assert "unknown SKU schema" in caplog.text


class TestCreateOrders:
    """Order entry"""

    def test_rows_without_quantity_are_skipped(self, service, repos, romper, bunny):
        repos["product"].find_with_prints.return_value = []
        rows = [
            SizeQuantity(size="0-3M", quantity=2, cost_price=200.0, size_id="size-0-3"),
            SizeQuantity(size="3-6M", quantity=0, cost_price=200.0, size_id="size-3-6"),
            SizeQuantity(size="6-9M", quantity=1, cost_price=210.0, size_id="size-6-9", sku="STORED"),
        ]
        orders = service.create_orders(romper, [bunny], rows, "2024-05-10")
        assert [o.sku for o in orders] == ["BUN_ROMP_0-3M", "STORED"]
        assert orders[0].category == "Romper"
        assert orders[0].print_name == "Bunny"
        assert orders[0].po_date == TODAY

    def test_blank_sku_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create_order("", "Romper", "Bunny", "S", 10, 1, TODAY)

    def test_zero_quantity_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create_order("A", "Romper", "Bunny", "S", 10, 0, TODAY)

    def test_update_normalizes_quantity(self, service, repos):
        service.update_order("o1", quantity="-3")
        repos["purchase_order"].update.assert_called_once_with("o1", {"quantity": 0})

    def test_update_quantity_and_cost(self, service, repos):
        service.update_order("o1", quantity=4, cost_price=215.0)
        repos["purchase_order"].update.assert_called_once_with("o1", {"quantity": 4, "cost_price": 215.0})


class TestSummaries:
    """Totals for the order list"""

    def test_summarize_by_category(self):
        orders = [
            make_order(category="Romper", quantity=2, cost_price=100.0),
            make_order(category="Romper", quantity=1, cost_price=100.0),
            make_order(category="Bib", quantity=10, cost_price=50.0),
        ]
        summary = PurchaseOrderService.summarize(orders)
        assert list(summary.columns) == ["category", "orders", "units", "value"]
        assert summary["category"].tolist() == ["Bib", "Romper"]
        assert summary.loc[1, "orders"] == 2
        assert summary.loc[1, "units"] == 3
        assert summary.loc[0, "value"] == 500.0

    def test_summarize_empty(self):
        assert PurchaseOrderService.summarize([]).empty

    def test_order_totals(self):
        totals = PurchaseOrderService.order_totals([make_order(quantity=2, cost_price=10.0), make_order(quantity=1, cost_price=5.0)])
        assert totals == {"orders": 2, "units": 3, "value": 25.0}
