"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's Pydantic request schemas and pass
the domain's validation rules (positive quantities, well-formed emails).
"""

import random
import uuid

from faker import Faker

fake = Faker()


def valid_email() -> str:
    """Emails with exactly one @ and a dotted domain, unique per call."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def user_data() -> dict:
    """RegisterUserRequest payload."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": fake.password(length=14),
        "address": fake.address().replace("\n", ", ")[:255],
    }


def product_data(stock: int | None = None) -> dict:
    """CreateProductRequest payload. Low stock by default so checkouts contend."""
    return {
        "name": f"{fake.color_name()} {fake.word().title()} {uuid.uuid4().hex[:4]}",
        "unit_cost": round(random.uniform(2.0, 250.0), 2),
        "available_quantity": stock if stock is not None else random.randint(5, 25),
        "description": fake.sentence(nb_words=10),
    }


def checkout_lines(product_ids: list[str], max_lines: int = 3) -> list[dict]:
    """One to `max_lines` line items over the given products, repeats allowed."""
    count = random.randint(1, max_lines)
    return [{"product_id": random.choice(product_ids), "quantity": random.randint(1, 3)} for _ in range(count)]
