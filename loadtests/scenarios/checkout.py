"""Checkout contention scenarios.

Many shoppers check out carts drawn from a small shared shelf, so most
products sell out mid-run. Rejected lines are expected; a checkout that fails
with anything other than an enveloped 200 is not.
"""

import os

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_lines, product_data, user_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState

ADMIN_ID = os.getenv("STOREFRONT_ADMIN_ID", "")

# Product ids seeded once per Locust process
SHELF: list[str] = []


def seed_shelf(client, size: int = 5) -> None:
    if SHELF:
        return
    for _ in range(size):
        resp = client.post(
            "/products",
            json=product_data(stock=20),
            headers={"X-User-Id": ADMIN_ID},
            name="POST /products",
        )
        if resp.status_code == 201:
            SHELF.append(resp.json()["data"]["product_id"])


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse available -> Checkout -> Review own orders."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["data"]["user_id"]
            else:
                resp.failure(f"Register failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        self.client.get("/products/available", name="GET /products/available")

    @task
    def checkout(self):
        if not SHELF:
            self.interrupt()
        with self.client.post(
            "/orders/checkout",
            json={"user_id": self.state.user_id, "lines": checkout_lines(SHELF)},
            catch_response=True,
            name="POST /orders/checkout",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Checkout failed: {extract_error_detail(resp)}")
                return
            data = resp.json()["data"]
            self.state.order_ids.extend(line["order_id"] for line in data["lines"] if line["order_id"])
            self.state.rejected_lines += data["rejected_count"]

    @task
    def my_orders(self):
        self.client.get("/orders", params={"user_id": self.state.user_id}, name="GET /orders?user_id")
        self.interrupt()


class CheckoutUser(HttpUser):
    tasks = [ShopperJourney]
    wait_time = between(0.1, 0.5)

    def on_start(self):
        seed_shelf(self.client)
