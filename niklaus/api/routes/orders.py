"""
Order submission and history endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from niklaus.api.dependencies import get_controller
from niklaus.application.dto.responses import ErrorResponse, OrderListResponse, OrderResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    entity_id: str | None = Query(default=None, description="Narrow history to one entity"),
    controller: AppSessionController = Depends(get_controller),
):
    """Order history visible to the profile, newest first."""
    orders = controller.order_history(entity_id)
    return OrderListResponse(
        orders=[OrderResponse.from_order(o) for o in orders],
        total=len(orders),
    )


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Empty cart, no entity or already submitting"},
        502: {"model": ErrorResponse, "description": "Order write failed; cart kept"},
    },
)
async def submit_order(
    controller: AppSessionController = Depends(get_controller),
):
    """Submit the cart as a PENDING order for the selected entity."""
    order = await controller.submit_order()
    return OrderResponse.from_order(order)
