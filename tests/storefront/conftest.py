from itertools import count

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

_sequence = count(1)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from storefront.product.creation import AddProduct

    def _make(**overrides) -> str:
        defaults = {
            "name": "Ceramic Pour-Over Dripper",
            "unit_cost": 24.5,
            "available_quantity": 10,
            "description": "Hand-glazed dripper for size 02 filters.",
        }
        defaults.update(overrides)
        return current_domain.process(AddProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def stock_of():
    from storefront.product.product import Product

    def _stock(product_id) -> int:
        return current_domain.repository_for(Product).get(product_id).available_quantity

    return _stock


@pytest.fixture()
def make_user():
    from storefront.account.registration import register_user
    from storefront.account.user import Role

    def _make(role=Role.USER, **overrides) -> str:
        n = next(_sequence)
        defaults = {
            "name": f"Shopper {n}",
            "email": f"shopper{n}@example.com",
            "password": "correct-horse-battery",
            "address": "12 Quay Street, Bristol",
        }
        defaults.update(overrides)
        return register_user(role=role, **defaults)

    return _make


@pytest.fixture()
def make_admin(make_user):
    from storefront.account.user import Role

    def _make(**overrides) -> str:
        return make_user(role=Role.ADMIN, **overrides)

    return _make


@pytest.fixture()
def shopper(make_user) -> str:
    return make_user()
