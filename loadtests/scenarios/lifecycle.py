"""Order lifecycle scenario: an administrator walks fresh orders to delivery
while a second task tries to cancel them, so transitions on one order race.
"""

import random

from locust import HttpUser, between, task

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.checkout import ADMIN_ID, SHELF, seed_shelf

_PATH = ["Confirmed", "Processing", "Shipped", "Delivered"]


class OrderAdminUser(HttpUser):
    wait_time = between(0.2, 1.0)

    def on_start(self):
        seed_shelf(self.client)
        self.headers = {"X-User-Id": ADMIN_ID}

    def _pending_order_ids(self) -> list[str]:
        resp = self.client.get("/orders", params={"status": "Pending"}, name="GET /orders?status")
        if resp.status_code != 200:
            return []
        return [order["order_id"] for order in resp.json()["data"]]

    @task(3)
    def advance(self):
        pending = self._pending_order_ids()
        if not pending:
            return
        order_id = random.choice(pending)
        for status in _PATH:
            with self.client.patch(
                f"/orders/{order_id}/status",
                json={"status": status},
                headers=self.headers,
                catch_response=True,
                name="PATCH /orders/{id}/status",
            ) as resp:
                # A concurrent cancel makes the next step illegal
                if resp.status_code == 409:
                    resp.success()
                    return
                if resp.status_code != 200:
                    resp.failure(extract_error_detail(resp))
                    return

    @task(1)
    def cancel(self):
        pending = self._pending_order_ids()
        if not pending:
            return
        with self.client.patch(
            f"/orders/{random.choice(pending)}/status",
            json={"status": "Cancelled"},
            headers=self.headers,
            catch_response=True,
            name="PATCH /orders/{id}/status (cancel)",
        ) as resp:
            if resp.status_code == 409:
                resp.success()
            elif resp.status_code != 200:
                resp.failure(extract_error_detail(resp))

    @task(1)
    def revenue(self):
        self.client.get("/orders/revenue", headers=self.headers, name="GET /orders/revenue")
