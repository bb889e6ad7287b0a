import pytest

from orange_sugar_inventory.data.models.catalog import Size
from orange_sugar_inventory.exceptions import DatabaseError
from orange_sugar_inventory.services.item_master_service import (
    NO_PRODUCT_ERROR,
    ItemMasterService,
    build_item_master_row
)


@pytest.fixture
def service(repos):
    return ItemMasterService(repos["product"], repos["size"], repos["weight"], repos["item_master"])


class TestBuildItemMasterRow:
    """Row layout for one product"""

    def test_row(self, romper, bunny, product_factory):
        product = product_factory(color="", material="Cotton", base_price=0)
        row = build_item_master_row(romper, bunny, product, "0-3M", 120.0)
        assert row["category_code"] == "Romper"
        assert row["style"] == "Bunny"
        assert row["product_code"] == "BUN_ROMP_0-3M"
        assert row["size"] == "0-3M"
        assert row["weight_gms"] == 120.0
        assert row["color"] is None
        assert row["base_price"] is None
        assert row["material"] == "Cotton"
        assert row["is_visible"] is True

    def test_fixed_values(self, romper, bunny, product_factory):
        row = build_item_master_row(romper, bunny, product_factory(), None, None)
        assert row["length_mm"] == 210
        assert row["width_mm"] == 180
        assert row["height_mm"] == 20
        assert row["isbn"] == "1"
        assert row["brand"] == "Orange Sugar"
        assert row["size"] is None
        assert row["weight_gms"] is None


class TestGenerate:
    """One upsert per selected size"""

    def test_generates_each_size(self, service, repos, romper, bunny, product_factory):
        repos["product"].find_by_print.side_effect = [
            product_factory(product_code="BUN_ROMP_0-3M"),
            product_factory(product_code="BUN_ROMP_3-6M", size_id="size-3-6"),
        ]
        repos["size"].get_by_id.side_effect = [Size("size-0-3", "0-3M"), Size("size-3-6", "3-6M")]
        repos["weight"].grams_for.return_value = 110.0

        result = service.generate(romper, bunny, ["size-0-3", "size-3-6"])

        assert result.success_count == 2
        assert result.error_count == 0
        upserted = [call.args[0] for call in repos["item_master"].upsert.call_args_list]
        assert [row["size"] for row in upserted] == ["0-3M", "3-6M"]

    def test_missing_product_is_recorded(self, service, repos, romper, bunny, product_factory):
        repos["product"].find_by_print.side_effect = [None, product_factory()]
        repos["size"].get_by_id.return_value = Size("size-0-3", "0-3M")

        result = service.generate(romper, bunny, ["size-x", "size-0-3"])

        assert result.success_count == 1
        assert result.results[0].error == NO_PRODUCT_ERROR
        assert repos["item_master"].upsert.call_count == 1

    def test_database_error_does_not_stop_run(self, service, repos, romper, bunny, product_factory):
        repos["product"].find_by_print.return_value = product_factory()
        repos["size"].get_by_id.return_value = Size("size-0-3", "0-3M")
        repos["item_master"].upsert.side_effect = [DatabaseError("boom"), 1]

        result = service.generate(romper, bunny, ["size-0-3", "size-0-3"])

        assert result.error_count == 1
        assert result.success_count == 1
        assert result.results[0].error == "boom"

    def test_hide_all(self, service, repos):
        repos["item_master"].hide_all.return_value = 4
        assert service.hide_all() == 4
