"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from storefront.product.creation import AddProduct
from storefront.product.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def shelf():
    """Product ids by product name."""
    return {}


@pytest.fixture()
def error():
    """Container for a captured storefront error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shopper", target_fixture="shopper_id")
def registered_shopper(make_user):
    return make_user()


@given(parsers.cfparse('a product "{name}" costing {cost:f} with {stock:d} in stock'))
def product_on_shelf(shelf, name, cost, stock):
    shelf[name] = current_domain.process(
        AddProduct(name=name, unit_cost=cost, available_quantity=stock),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_has_stock(shelf, name, stock):
    assert current_domain.repository_for(Product).get(shelf[name]).available_quantity == stock


@then(parsers.re(r"the (?:checkout|move) is refused as \"(?P<kind>\w+)\""))
def request_refused(error, kind):
    exc = error["exc"]
    assert isinstance(exc, ValidationError), f"expected a {kind} error, got {exc!r}"
    assert exc.kind.value == kind
