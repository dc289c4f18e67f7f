"""Application tests for the read-only catalog."""

import dataclasses

import pytest

from storefront.catalog import listing
from storefront.product.stock import reserve_stock
from storefront.shared.errors import InvalidQuantity, NotFound


@pytest.fixture()
def shelf(make_product):
    return {
        "kettle": make_product(name="Copper Kettle", unit_cost=80.0, available_quantity=2),
        "mug": make_product(name="Enamel Camp Mug", unit_cost=12.0, available_quantity=0),
        "board": make_product(name="Walnut Cutting Board", unit_cost=45.0, available_quantity=7),
    }


class TestCatalog:
    def test_list_products(self, shelf):
        names = [card.name for card in listing.list_products()]
        assert names == ["Copper Kettle", "Enamel Camp Mug", "Walnut Cutting Board"]

    def test_get_product(self, shelf):
        card = listing.get_product(shelf["kettle"])
        assert card.name == "Copper Kettle"
        assert card.available_quantity == 2
        assert card.in_stock

    def test_get_unknown_product(self):
        with pytest.raises(NotFound):
            listing.get_product("missing-product")

    def test_list_available(self, shelf):
        names = {card.name for card in listing.list_available()}
        assert names == {"Copper Kettle", "Walnut Cutting Board"}

    def test_sold_out_product_drops_out_of_available(self, shelf):
        reserve_stock(shelf["kettle"], 2)
        names = {card.name for card in listing.list_available()}
        assert names == {"Walnut Cutting Board"}

    def test_search_is_case_insensitive_substring(self, shelf):
        assert [card.name for card in listing.search("KETTLE")] == ["Copper Kettle"]
        assert {card.name for card in listing.search("e")} == {"Copper Kettle", "Enamel Camp Mug"}
        assert [card.name for card in listing.search("cutting b")] == ["Walnut Cutting Board"]

    def test_blank_search_matches_nothing(self, shelf):
        assert listing.search("   ") == []

    def test_max_cost_is_inclusive(self, shelf):
        assert [card.name for card in listing.max_cost(45.0)] == ["Enamel Camp Mug", "Walnut Cutting Board"]

    def test_max_cost_rejects_negative_bound(self):
        with pytest.raises(InvalidQuantity):
            listing.max_cost(-1)

    def test_cards_are_read_only(self, shelf):
        card = listing.get_product(shelf["mug"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            card.available_quantity = 99
