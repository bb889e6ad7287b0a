import pytest

from orange_sugar_inventory.data.models.catalog import Category, Size
from orange_sugar_inventory.data.models.item_master import (
    ACTION_ADDED_TO_MASTER,
    ACTION_CREATED,
    ACTION_EXISTED,
    BundleReferenceRow,
    ExistingBundle,
    IndividualProduct
)
from orange_sugar_inventory.exceptions import DatabaseError, NotFoundError, ValidationError
from orange_sugar_inventory.services.bundle_service import (
    EXISTING_REFERENCE_ERROR,
    MISSING_REFERENCE_ERROR,
    BundleService,
    bundle_print_codes,
    bundle_product_name
)


@pytest.fixture
def bib():
    return Category(id="cat-bib", category_name="Bib", category_code="BIB", sku_schema=2, hsn_code="6217")


@pytest.fixture
def service(repos, romper, gift_set, bib, product_factory):
    categories = {c.id: c for c in (romper, gift_set, bib)}
    repos["category"].get_by_id.side_effect = categories.get

    products = {
        "cat-romper": product_factory(id="p-romper", cost_price=200.0, mrp=599.0, base_price=None),
        "cat-bib": product_factory(
            id="p-bib", category_id="cat-bib", product_code="BIB_BUN_0-3M",
            cost_price=100.0, mrp=299.0, base_price=250.0
        ),
    }
    repos["product"].find_by_size_name.side_effect = lambda category_id, size_name, print_id: products.get(category_id)
    repos["size"].get_by_name.return_value = Size("size-0-3", "0-3M")
    repos["weight"].grams_for.return_value = 100.0
    repos["bundle_reference"].find_component.return_value = None

    return BundleService(
        repos["category"], repos["size"], repos["product"], repos["weight"],
        repos["bundle_reference"], repos["bundle_item_master"]
    )


class TestBundleHelpers:
    """Print codes and names of a bundle"""

    def test_print_codes_sorted_and_unique(self):
        products = [
            IndividualProduct("c1", "ROMP", "p1", "ROC", "Rocket"),
            IndividualProduct("c2", "BIB", "p2", "BUN", "Bunny"),
            IndividualProduct("c3", "HAT", "p1", "ROC", "Rocket"),
            IndividualProduct("c4", "SOCK", "p3", "", "Plain"),
        ]
        assert bundle_print_codes(products) == [("BUN", "Bunny"), ("ROC", "Rocket")]

    def test_print_codes_sorted_ignoring_case(self):
        products = [
            IndividualProduct("c1", "ROMP", "p1", "PP", "Polka"),
            IndividualProduct("c2", "BIB", "p2", "bb", "Baby Blue"),
        ]
        assert [code for code, _ in bundle_print_codes(products)] == ["bb", "PP"]

    def test_name_uses_code_without_prefix(self, gift_set):
        assert bundle_product_name(gift_set, "GS", ["Bunny", "Rocket"], "0-3M") == "GS | Bunny, Rocket 0-3M"

    def test_name_uses_prefix(self, gift_set):
        gift_set.product_name_prefix = "Gift Set | "
        assert bundle_product_name(gift_set, "GS", ["Bunny"], "0-3M") == "Gift Set | Bunny 0-3M"

    def test_standard_size_not_in_name(self, gift_set):
        assert bundle_product_name(gift_set, "GS", ["Bunny"], "Standard") == "GS | Bunny"

    def test_size_left_out_when_category_says_so(self, gift_set):
        gift_set.size_in_product_name = False
        assert bundle_product_name(gift_set, "GS", ["Bunny"], "0-3M") == "GS | Bunny"


class TestCommonSizes:
    """Sizes shared by every selected product"""

    def test_intersection(self, service, repos, bundle_products):
        repos["size"].get_all.side_effect = [
            [Size("a", "0-3M"), Size("b", "3-6M"), Size("c", "6-9M")],
            [Size("c", "6-9M"), Size("b", "3-6M")],
        ]
        assert [s.size_name for s in service.common_sizes(bundle_products)] == ["3-6M", "6-9M"]
        repos["size"].get_all.assert_any_call("cat-romper", ["print-rocket"])


class TestCheckReference:
    """Reference table lookup"""

    def test_match_needs_one_component_per_product(self, service, repos, bundle_products):
        rows = {
            "0-3M": [
                BundleReferenceRow(product_code="GS_BUN_ROC_SKY_0-3M", component_product_code="X"),
                BundleReferenceRow(product_code="GS_BUN_ROC_SKY_0-3M", component_product_code="Y"),
                BundleReferenceRow(product_code="GS_BUN_ROC_SKY_0-3M", component_product_code="Z"),
                BundleReferenceRow(product_code="GS_BUN_ROC_0-3M", component_product_code="ROC_ROMP_0-3M"),
                BundleReferenceRow(product_code="GS_BUN_ROC_0-3M", component_product_code="BIB_BUN_0-3M"),
            ],
            "3-6M": [],
        }
        repos["bundle_reference"].find_by_prints.side_effect = lambda code, size, prints: rows[size]

        check = service.check_reference("GS", bundle_products, ["0-3M", "3-6M"])

        assert [b.product_code for b in check.existing_bundles] == ["GS_BUN_ROC_0-3M"]
        assert len(check.existing_bundles[0].components) == 2
        assert check.missing_bundles == ["GS | Rocket, Bunny | 3-6M"]
        assert check.unavailable_sizes == ["3-6M"]
        assert not check.exists
        repos["bundle_reference"].find_by_prints.assert_any_call("GS", "0-3M", ["ROC", "BUN"])

    def test_all_found(self, service, repos, bundle_products):
        repos["bundle_reference"].find_by_prints.return_value = [
            BundleReferenceRow(product_code="GS_BUN_ROC_0-3M"),
            BundleReferenceRow(product_code="GS_BUN_ROC_0-3M"),
        ]
        assert service.check_reference("GS", bundle_products, ["0-3M"]).exists


class TestGenerate:
    """Bundle SKU generation"""

    def test_creates_reference_and_item_master_rows(self, service, repos, bundle_products):
        result = service.generate("cat-gift", "GS", bundle_products, ["0-3M"])

        assert result.error_count == 0
        assert result.added_to_master_count == 2
        assert repos["bundle_reference"].create.call_count == 2

        rows = [call.args[0] for call in repos["bundle_item_master"].insert.call_args_list]
        assert {row["product_code"] for row in rows} == {"GS_BUN_ROC_0-3M"}
        assert [row["component_product_code"] for row in rows] == ["ROC_ROMP_0-3M", "BIB_BUN_0-3M"]
        assert [row["component_price"] for row in rows] == [599.0, 299.0]
        assert [row["style"] for row in rows] == ["Rocket", "Bunny"]

        first = rows[0]
        assert first["name"] == "GS | Bunny, Rocket 0-3M"
        assert first["cost_price"] == 300.0
        assert first["mrp"] == 898.0
        assert first["base_price"] == 849.0
        assert first["weight_gms"] == 200.0
        assert first["scan_type"] == "SIMPLE"
        assert first["type"] == "BUNDLE"
        assert first["tax_calculation_type"] == "PRICE_OF_BUNDLE_SKU"

    def test_reference_only(self, service, repos, bundle_products):
        result = service.generate("cat-gift", "GS", bundle_products, ["0-3M"], add_to_item_master=False)
        assert result.created_count == 2
        assert all(r.action == ACTION_CREATED for r in result.results)
        repos["bundle_item_master"].insert.assert_not_called()

    def test_existing_reference_is_reported(self, service, repos, bundle_products):
        repos["bundle_reference"].find_component.return_value = BundleReferenceRow(product_code="GS_BUN_ROC_0-3M")
        result = service.generate("cat-gift", "GS", bundle_products, ["0-3M"], add_to_item_master=False)
        assert result.existed_count == 2
        assert result.results[0].error == EXISTING_REFERENCE_ERROR
        repos["bundle_reference"].create.assert_not_called()

    def test_missing_reference_without_create(self, service, repos, bundle_products):
        result = service.generate(
            "cat-gift", "GS", bundle_products, ["0-3M"],
            add_to_item_master=True, create_reference_if_missing=False
        )
        assert result.error_count == 2
        assert result.results[0].error == MISSING_REFERENCE_ERROR
        assert result.results[0].action == ACTION_ADDED_TO_MASTER
        repos["bundle_item_master"].insert.assert_not_called()

    def test_reference_values_win(self, service, repos, bundle_products):
        repos["bundle_reference"].find_component.return_value = BundleReferenceRow(
            product_code="GS_BUN_ROC_0-3M", name="Legacy Name", component_quantity=2, cost_price=1.0
        )
        service.generate("cat-gift", "GS", bundle_products, ["0-3M"])
        row = repos["bundle_item_master"].insert.call_args_list[0].args[0]
        assert row["name"] == "Legacy Name"
        assert row["component_quantity"] == 2
        assert row["cost_price"] == 300.0

    def test_insert_failure_is_recorded(self, service, repos, bundle_products):
        repos["bundle_item_master"].insert.side_effect = [DatabaseError("duplicate"), 1]
        result = service.generate("cat-gift", "GS", bundle_products, ["0-3M"])
        assert result.error_count == 1
        assert result.added_to_master_count == 1

    def test_print_order_does_not_change_sku(self, service, repos, bundle_products):
        service.generate("cat-gift", "GS", list(reversed(bundle_products)), ["0-3M"])
        rows = [call.args[0] for call in repos["bundle_item_master"].insert.call_args_list]
        assert {row["product_code"] for row in rows} == {"GS_BUN_ROC_0-3M"}

    def test_unknown_category(self, service, bundle_products):
        with pytest.raises(NotFoundError):
            service.generate("nope", "GS", bundle_products, ["0-3M"])

    def test_category_without_code(self, service, gift_set, bundle_products):
        gift_set.category_code = None
        with pytest.raises(ValidationError):
            service.generate("cat-gift", "GS", bundle_products, ["0-3M"])


class TestAddFromReference:
    """Copying found bundles into the bundle item master"""

    def test_prices_refreshed_from_products(self, service, repos, bundle_products):
        bundle = ExistingBundle(
            product_code="GS_BUN_ROC_0-3M",
            size_name="0-3M",
            components=[
                BundleReferenceRow(
                    product_code="GS_BUN_ROC_0-3M", component_product_code="ROC_ROMP_0-3M",
                    component_price=1.0, cost_price=5.0, internal_style_name="Rocket", weight_gms=999.0
                ),
                BundleReferenceRow(
                    product_code="GS_BUN_ROC_0-3M", component_product_code="UNKNOWN",
                    component_price=42.0
                ),
            ]
        )

        result = service.add_from_reference([bundle], bundle_products)

        assert result.success_count == 2
        rows = [call.args[0] for call in repos["bundle_item_master"].insert.call_args_list]
        assert rows[0]["component_price"] == 599.0
        assert rows[1]["component_price"] == 42.0
        assert rows[0]["cost_price"] == 300.0
        assert rows[0]["weight_gms"] == 200.0
        assert rows[0]["style"] == "Rocket"
        assert rows[0]["scan_type"] == "SIMPLE"

    def test_list_reference_search(self, service, repos):
        repos["bundle_reference"].get_all.return_value = [
            BundleReferenceRow(product_code="GS_BUN_ROC_0-3M", internal_style_name="Rocket", size="0-3M"),
            BundleReferenceRow(product_code="GS_SKY_0-3M", internal_style_name="Sky", size="0-3M"),
        ]
        assert len(service.list_reference()) == 2
        assert [r.product_code for r in service.list_reference("rocket")] == ["GS_BUN_ROC_0-3M"]
        assert service.list_reference("6-9M") == []

    def test_delete_item_master(self, service, repos):
        repos["bundle_item_master"].delete.return_value = 7
        assert service.delete_item_master("2024-05-01") == 7
        repos["bundle_item_master"].delete.assert_called_once_with("2024-05-01")


class TestAddBundles:
    """Adding a bundle selection from the bundle item master page"""

    def _reference_rows(self, size_name):
        return [
            BundleReferenceRow(
                product_code=f"GS_BUN_ROC_{size_name}", category_code="Gift Set",
                component_product_code=f"ROC_ROMP_{size_name}", size=size_name
            ),
            BundleReferenceRow(
                product_code=f"GS_BUN_ROC_{size_name}", category_code="Gift Set",
                component_product_code=f"BIB_BUN_{size_name}", size=size_name
            ),
        ]

    def test_reference_looked_up_by_category_name(self, service, repos, gift_set, bundle_products):
        repos["bundle_reference"].find_by_prints.return_value = self._reference_rows("0-3M")

        service.add_bundles(gift_set, bundle_products, ["0-3M"])

        repos["bundle_reference"].find_by_prints.assert_called_once_with("Gift Set", "0-3M", ["ROC", "BUN"])

    def test_existing_sizes_copied_and_missing_sizes_generated(self, service, repos, gift_set, bundle_products):
        rows = {"0-3M": self._reference_rows("0-3M"), "3-6M": []}
        repos["bundle_reference"].find_by_prints.side_effect = lambda category, size, prints: rows[size]

        result = service.add_bundles(gift_set, bundle_products, ["0-3M", "3-6M"])

        assert result.error_count == 0
        assert result.added_to_master_count == 4
        inserted = [call.args[0] for call in repos["bundle_item_master"].insert.call_args_list]
        assert [row["product_code"] for row in inserted] == [
            "GS_BUN_ROC_0-3M", "GS_BUN_ROC_0-3M", "GS_BUN_ROC_3-6M", "GS_BUN_ROC_3-6M"
        ]

        created = [call.args[0] for call in repos["bundle_reference"].create.call_args_list]
        assert len(created) == 2
        assert {row.size for row in created} == {"3-6M"}
        assert created[0].category_code == "Gift Set"
        assert created[0].name == "Gift Set | Bunny, Rocket 3-6M"

    def test_all_found_creates_no_reference_rows(self, service, repos, gift_set, bundle_products):
        repos["bundle_reference"].find_by_prints.return_value = self._reference_rows("0-3M")

        result = service.add_bundles(gift_set, bundle_products, ["0-3M"])

        assert result.added_to_master_count == 2
        repos["bundle_reference"].create.assert_not_called()
