import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api.orders import router as order_router
from storefront.api.products import router as product_router
from storefront.api.responses import register_exception_handlers
from storefront.api.users import router as user_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(user_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def admin_headers(make_admin):
    return {"X-User-Id": make_admin()}


@pytest.fixture()
def shopper_headers(shopper):
    return {"X-User-Id": shopper}
