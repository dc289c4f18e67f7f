"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Envelope ---


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Any = None
    error: str | None = None
    timestamp: datetime


# --- Product Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Pour-Over Dripper",
                    "unit_cost": 24.5,
                    "available_quantity": 40,
                    "description": "Hand-glazed dripper for size 02 filters.",
                    "image_url": "https://cdn.example.com/img/dripper.jpg",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    unit_cost: float = Field(..., ge=0)
    available_quantity: int = 0
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Pour-Over Dripper (White)",
                    "unit_cost": 26.0,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    unit_cost: float | None = Field(None, ge=0)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class SetStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 25}]}}

    quantity: Any


class RestockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"delta": 10}]}}

    delta: Any


class ProductOut(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    unit_cost: float
    available_quantity: int
    image_url: str | None = None
    in_stock: bool


# --- Order Schemas ---


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "2f1c7a7e-3f0e-4a6b-9d55-0f3e3c1d9a10",
                    "product_id": "8b0e4f55-1d2a-4e1c-8f61-4c1b2a9d7e33",
                    "quantity": 2,
                }
            ]
        }
    }

    user_id: str
    product_id: str
    quantity: Any


class CheckoutLineRequest(BaseModel):
    product_id: str
    quantity: Any


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "2f1c7a7e-3f0e-4a6b-9d55-0f3e3c1d9a10",
                    "lines": [
                        {"product_id": "8b0e4f55-1d2a-4e1c-8f61-4c1b2a9d7e33", "quantity": 2},
                        {"product_id": "c3d1e2f4-5a6b-4c7d-8e9f-0a1b2c3d4e5f", "quantity": 1},
                    ],
                }
            ]
        }
    }

    user_id: str
    lines: list[CheckoutLineRequest]


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped"}]}}

    status: str = Field(..., max_length=20)


class OrderOut(BaseModel):
    order_id: str
    user_id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_cost: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LineResultOut(BaseModel):
    product_id: str
    quantity: Any
    status: str
    order_id: str | None = None
    reason: str | None = None
    message: str | None = None


class CheckoutOut(BaseModel):
    user_id: str
    lines: list[LineResultOut]
    created_count: int
    rejected_count: int


class RevenueOut(BaseModel):
    total_revenue: str
    by_status: dict[str, str]
    order_count: int


# --- User Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mara Okafor",
                    "email": "mara@example.com",
                    "password": "correct-horse-battery",
                    "address": "12 Quay Street, Bristol",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1)
    address: str | None = None


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    address: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    user_id: str
    name: str
    email: str
    role: str
    address: str | None = None
