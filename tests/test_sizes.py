from orange_sugar_inventory.data.models.catalog import Size
from orange_sugar_inventory.sku.sizes import intersect_sizes, size_name, sort_sizes


class TestIntersectSizes:
    """Common sizes across bundle products"""

    def test_no_lists(self):
        assert intersect_sizes([]) == []

    def test_only_empty_lists(self):
        assert intersect_sizes([[]]) == []
        assert intersect_sizes([[], []]) == []

    def test_single_list_is_returned_in_order(self):
        assert intersect_sizes([["S", "M"]]) == ["S", "M"]

    def test_order_follows_first_list(self):
        assert intersect_sizes([["S", "M", "L"], ["M", "L", "XL"]]) == ["M", "L"]
        assert intersect_sizes([["L", "M", "S"], ["S", "M"]]) == ["M", "S"]

    def test_empty_list_is_no_constraint(self):
        assert intersect_sizes([["S", "M"], []]) == ["S", "M"]
        assert intersect_sizes([[], ["S", "M"], ["M"]]) == ["M"]

    def test_no_overlap(self):
        assert intersect_sizes([["S"], ["M"]]) == []

    def test_three_lists(self):
        lists = [["0-3M", "3-6M", "6-9M"], ["3-6M", "6-9M"], ["6-9M", "3-6M", "9-12M"]]
        assert intersect_sizes(lists) == ["3-6M", "6-9M"]

    def test_matches_by_name_not_identity(self):
        first = [Size(id="a", size_name="S"), Size(id="b", size_name="M")]
        second = [Size(id="x", size_name="M")]
        result = intersect_sizes([first, second])
        assert result == [first[1]]
        assert result[0].id == "b"

    def test_dict_rows(self):
        assert intersect_sizes([[{"size_name": "S"}, {"size_name": "M"}], ["M"]]) == [{"size_name": "M"}]

    def test_idempotent(self):
        lists = [["S", "M", "L"], ["L", "M"]]
        assert intersect_sizes(lists) == intersect_sizes(lists)

    def test_inputs_not_modified(self):
        first, second = ["S", "M", "L"], ["M"]
        intersect_sizes([first, second])
        assert first == ["S", "M", "L"]
        assert second == ["M"]


class TestSortSizes:
    """Display ordering of sizes"""

    def test_known_sizes_follow_size_order(self):
        assert sort_sizes(["2-3Y", "0-3M", "6-9M"]) == ["0-3M", "6-9M", "2-3Y"]

    def test_unknown_sizes_last_alphabetically(self):
        assert sort_sizes(["XL", "0-3M", "Free", "3-6M"]) == ["0-3M", "3-6M", "Free", "XL"]

    def test_size_records(self):
        sizes = [Size(id="2", size_name="3-6M"), Size(id="1", size_name="0-3M")]
        assert [s.id for s in sort_sizes(sizes)] == ["1", "2"]

    def test_size_name(self):
        assert size_name("M") == "M"
        assert size_name({"size_name": "L"}) == "L"
        assert size_name(Size(id="1", size_name="S")) == "S"
