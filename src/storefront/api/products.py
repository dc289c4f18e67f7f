"""FastAPI endpoints for the product catalog and the Product Ledger."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.guards import require_admin
from storefront.api.responses import envelope
from storefront.api.schemas import (
    ApiResponse,
    CreateProductRequest,
    ProductOut,
    RestockRequest,
    SetStockRequest,
    UpdateProductRequest,
)
from storefront.catalog import listing
from storefront.catalog.listing import ProductCard
from storefront.product.creation import AddProduct
from storefront.product.details import update_product_details
from storefront.product.removal import remove_product
from storefront.product.stock import restock, set_stock
from storefront.shared.errors import require_non_negative_quantity

router = APIRouter(prefix="/products", tags=["products"])


def _out(card: ProductCard) -> ProductOut:
    return ProductOut(
        product_id=card.product_id,
        name=card.name,
        description=card.description,
        unit_cost=card.unit_cost,
        available_quantity=card.available_quantity,
        image_url=card.image_url,
        in_stock=card.in_stock,
    )


# --- Catalog (read-only) ---


@router.get("", response_model=ApiResponse)
async def list_products() -> ApiResponse:
    cards = listing.list_products()
    return envelope([_out(card) for card in cards], message=f"{len(cards)} products")


@router.get("/available", response_model=ApiResponse)
async def list_available() -> ApiResponse:
    cards = listing.list_available()
    return envelope([_out(card) for card in cards], message=f"{len(cards)} products in stock")


@router.get("/search", response_model=ApiResponse)
async def search_products(name: str = "") -> ApiResponse:
    cards = listing.search(name)
    return envelope([_out(card) for card in cards], message=f"{len(cards)} products match {name!r}")


@router.get("/max-cost", response_model=ApiResponse)
async def products_under(cost: float) -> ApiResponse:
    cards = listing.max_cost(cost)
    return envelope([_out(card) for card in cards], message=f"{len(cards)} products at or under {cost}")


@router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str) -> ApiResponse:
    return envelope(_out(listing.get_product(product_id)))


# --- Ledger administration ---


@router.post("", status_code=201, response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def add_product(body: CreateProductRequest) -> ApiResponse:
    require_non_negative_quantity(body.available_quantity, field="available_quantity")
    command = AddProduct(
        name=body.name,
        unit_cost=body.unit_cost,
        available_quantity=body.available_quantity,
        description=body.description,
        image_url=body.image_url,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return envelope(_out(listing.get_product(product_id)), message="Product created")


@router.put("/{product_id}", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: UpdateProductRequest) -> ApiResponse:
    update_product_details(
        product_id,
        name=body.name,
        description=body.description,
        unit_cost=body.unit_cost,
        image_url=body.image_url,
    )
    return envelope(_out(listing.get_product(product_id)), message="Product updated")


@router.delete("/{product_id}", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str) -> ApiResponse:
    remove_product(product_id)
    return envelope({"product_id": product_id}, message="Product removed")


@router.patch("/{product_id}/stock", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def set_product_stock(product_id: str, body: SetStockRequest) -> ApiResponse:
    available = set_stock(product_id, body.quantity)
    return envelope({"product_id": product_id, "available_quantity": available}, message="Stock level set")


@router.post("/{product_id}/restock", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def restock_product(product_id: str, body: RestockRequest) -> ApiResponse:
    available = restock(product_id, body.delta)
    return envelope({"product_id": product_id, "available_quantity": available}, message="Product restocked")
