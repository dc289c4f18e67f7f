"""Storefront load testing: Locust entry point.

Requires an administrator account, created with
`python src/manage.py create-admin ...`, whose id is exported as
STOREFRONT_ADMIN_ID.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Checkout contention only, headless:
    locust -f loadtests/locustfile.py CheckoutUser --headless \
           -u 50 -r 5 -t 120s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.checkout import ADMIN_ID, SHELF, CheckoutUser  # noqa: F401
from loadtests.scenarios.lifecycle import OrderAdminUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if not ADMIN_ID:
        print("[LOADTEST] STOREFRONT_ADMIN_ID is not set; product seeding will be refused")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the stock left on the seeded shelf; no counter may be negative."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    for product_id in SHELF:
        try:
            resp = requests.get(f"{environment.host}/products/{product_id}", timeout=5)
            data = resp.json()["data"]
            print(f"  {data['name']}: {data['available_quantity']} left")
            if data["available_quantity"] < 0:
                logger.error("[LOADTEST] Product %s oversold: %s", product_id, data["available_quantity"])
        except Exception as e:
            print(f"[LOADTEST] Could not read product {product_id}: {e}")
    print()
