"""Application tests for the Product Ledger's stock entry points."""

import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError

from storefront.product.product import Product
from storefront.product.stock import release_stock, reserve_stock, restock, set_stock
from storefront.shared.errors import InvalidQuantity, NotFound, OutOfStock
from storefront.shared.locking import stock_locks


class TestReserveStock:
    def test_reserve_persists(self, make_product, stock_of):
        product_id = make_product(available_quantity=10)
        snapshot = reserve_stock(product_id, 4)
        assert snapshot["available_quantity"] == 6
        assert snapshot["name"] == "Ceramic Pour-Over Dripper"
        assert snapshot["unit_cost"] == 24.5
        assert stock_of(product_id) == 6

    def test_reserve_last_unit(self, make_product, stock_of):
        product_id = make_product(available_quantity=1)
        reserve_stock(product_id, 1)
        assert stock_of(product_id) == 0

    def test_reserve_too_many_leaves_stock_unchanged(self, make_product, stock_of):
        product_id = make_product(available_quantity=3)
        with pytest.raises(OutOfStock):
            reserve_stock(product_id, 4)
        assert stock_of(product_id) == 3

    def test_reserve_unknown_product(self):
        with pytest.raises(NotFound):
            reserve_stock("missing-product", 1)

    @pytest.mark.parametrize("quantity", [0, -5, 2.0])
    def test_reserve_invalid_quantity(self, make_product, stock_of, quantity):
        product_id = make_product(available_quantity=3)
        with pytest.raises(InvalidQuantity):
            reserve_stock(product_id, quantity)
        assert stock_of(product_id) == 3

    def test_version_conflict_is_reported_as_out_of_stock(self, make_product, stock_of, monkeypatch):
        product_id = make_product(available_quantity=3)

        def conflicting(*args, **kwargs):
            raise ExpectedVersionError("Wrong expected version")

        monkeypatch.setattr(current_domain, "process", conflicting)
        with pytest.raises(OutOfStock) as exc:
            reserve_stock(product_id, 1)
        assert exc.value.conflict
        monkeypatch.undo()
        assert stock_of(product_id) == 3

    def test_failure_after_check_leaves_stock_unchanged(self, make_product, stock_of, monkeypatch):
        product_id = make_product(available_quantity=2)
        repo_cls = type(current_domain.repository_for(Product))

        def failing_add(self, item, *args, **kwargs):
            raise RuntimeError("storage went away")

        monkeypatch.setattr(repo_cls, "add", failing_add)
        with pytest.raises(RuntimeError):
            reserve_stock(product_id, 2)
        monkeypatch.undo()

        assert stock_of(product_id) == 2


class TestReleaseStock:
    def test_release_adds_back(self, make_product, stock_of):
        product_id = make_product(available_quantity=2)
        assert release_stock(product_id, 3) == 5
        assert stock_of(product_id) == 5

    def test_release_unknown_product(self):
        with pytest.raises(NotFound):
            release_stock("missing-product", 1)


class TestRestock:
    def test_restock_persists(self, make_product, stock_of):
        product_id = make_product(available_quantity=0)
        assert restock(product_id, 12) == 12
        assert stock_of(product_id) == 12

    @pytest.mark.parametrize("delta", [0, -1, "5"])
    def test_restock_requires_positive_integer(self, make_product, stock_of, delta):
        product_id = make_product(available_quantity=4)
        with pytest.raises(InvalidQuantity):
            restock(product_id, delta)
        assert stock_of(product_id) == 4


class TestSetStock:
    def test_set_stock_persists(self, make_product, stock_of):
        product_id = make_product(available_quantity=9)
        assert set_stock(product_id, 1) == 1
        assert stock_of(product_id) == 1

    def test_set_stock_zero(self, make_product, stock_of):
        product_id = make_product(available_quantity=9)
        set_stock(product_id, 0)
        assert stock_of(product_id) == 0

    def test_set_stock_negative_fails(self, make_product, stock_of):
        product_id = make_product(available_quantity=9)
        with pytest.raises(InvalidQuantity):
            set_stock(product_id, -3)
        assert stock_of(product_id) == 9

    def test_set_stock_unknown_product(self):
        with pytest.raises(NotFound):
            set_stock("missing-product", 3)


class TestLockRegistry:
    def test_registry_returns_to_baseline_after_unknown_products(self):
        baseline = len(stock_locks)
        for i in range(200):
            with pytest.raises(NotFound):
                reserve_stock(f"no-such-product-{i}", 1)
        assert len(stock_locks) == baseline

    def test_registry_returns_to_baseline_after_reservations(self, make_product):
        product_ids = [make_product(available_quantity=2) for _ in range(5)]
        baseline = len(stock_locks)
        for product_id in product_ids:
            reserve_stock(product_id, 1)
            restock(product_id, 1)
        assert len(stock_locks) == baseline
