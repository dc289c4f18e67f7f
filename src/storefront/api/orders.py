"""FastAPI endpoints for checkout and the Order Record Store."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.guards import require_admin
from storefront.api.responses import envelope
from storefront.api.schemas import (
    ApiResponse,
    CheckoutOut,
    CheckoutRequest,
    CreateOrderRequest,
    LineResultOut,
    OrderOut,
    RevenueOut,
    UpdateOrderStatusRequest,
)
from storefront.checkout.cart import Cart, CartLine
from storefront.checkout.orchestrator import CheckoutResult, checkout, create_order
from storefront.order.lifecycle import transition
from storefront.order.order import Order
from storefront.order.removal import remove_order
from storefront.order.revenue import revenue_by_status, total_revenue

router = APIRouter(prefix="/orders", tags=["orders"])


def order_out(order: Order) -> OrderOut:
    return OrderOut(
        order_id=str(order.id),
        user_id=str(order.user_id),
        product_id=str(order.product_id),
        product_name=order.product_name,
        quantity=order.quantity,
        unit_cost=order.unit_cost,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _checkout_out(result: CheckoutResult) -> CheckoutOut:
    return CheckoutOut(
        user_id=result.user_id,
        lines=[
            LineResultOut(
                product_id=line.product_id,
                quantity=line.quantity,
                status="Created" if line.created else "Rejected",
                order_id=line.order_id,
                reason=line.reason.value if line.reason else None,
                message=line.message,
            )
            for line in result.lines
        ],
        created_count=len(result.created_order_ids),
        rejected_count=result.rejected_count,
    )


@router.post("", status_code=201, response_model=ApiResponse)
async def place_order(body: CreateOrderRequest) -> ApiResponse:
    order = create_order(body.user_id, body.product_id, body.quantity)
    return envelope(order_out(order), message="Order created")


@router.post("/checkout", response_model=ApiResponse)
async def checkout_cart(body: CheckoutRequest) -> ApiResponse:
    cart = Cart(lines=tuple(CartLine(product_id=line.product_id, quantity=line.quantity) for line in body.lines))
    result = checkout(body.user_id, cart)
    created = len(result.created_order_ids)
    if result.success:
        message = f"{created} of {len(result.lines)} line items ordered"
    else:
        message = "No line items could be ordered"
    return envelope(_checkout_out(result), message=message, success=result.success)


@router.get("", response_model=ApiResponse)
async def list_orders(user_id: str | None = None, status: str | None = None) -> ApiResponse:
    orders = current_domain.repository_for(Order).listing(user_id=user_id, status=status)
    return envelope([order_out(order) for order in orders], message=f"{len(orders)} orders")


@router.get("/revenue", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def revenue() -> ApiResponse:
    orders = current_domain.repository_for(Order).listing()
    summary = RevenueOut(
        total_revenue=str(total_revenue(orders)),
        by_status={status: str(amount) for status, amount in revenue_by_status(orders).items()},
        order_count=len(orders),
    )
    return envelope(summary, message="Revenue summary")


@router.get("/{order_id}", response_model=ApiResponse)
async def get_order(order_id: str) -> ApiResponse:
    order = current_domain.repository_for(Order).get_order(order_id)
    return envelope(order_out(order))


@router.patch("/{order_id}/status", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> ApiResponse:
    order = transition(order_id, body.status)
    return envelope(order_out(order), message=f"Order is {order.status}")


@router.delete("/{order_id}", response_model=ApiResponse, dependencies=[Depends(require_admin)])
async def delete_order(order_id: str) -> ApiResponse:
    remove_order(order_id)
    return envelope({"order_id": order_id}, message="Order removed")
