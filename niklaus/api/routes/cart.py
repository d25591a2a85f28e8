"""
Cart endpoints.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller
from niklaus.application.dto.requests import AddToCartRequest, AdjustQuantityRequest
from niklaus.application.dto.responses import CartResponse, ErrorResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_response(controller: AppSessionController) -> CartResponse:
    state = controller.state
    return CartResponse.from_cart(state.cart, state.submitting)


@router.get("", response_model=CartResponse)
async def get_cart(
    controller: AppSessionController = Depends(get_controller),
):
    """Current cart with totals."""
    return _cart_response(controller)


@router.post(
    "/items",
    response_model=CartResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No entity selected or product unavailable"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def add_item(
    request: AddToCartRequest,
    controller: AppSessionController = Depends(get_controller),
):
    """Add a product; adding one already in the cart changes nothing."""
    controller.add_to_cart(request.product_id)
    return _cart_response(controller)


@router.patch("/items/{product_id}", response_model=CartResponse)
async def adjust_item(
    product_id: str,
    request: AdjustQuantityRequest,
    controller: AppSessionController = Depends(get_controller),
):
    """Shift a line's quantity (never below 1)."""
    controller.adjust_quantity(product_id, request.delta)
    return _cart_response(controller)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_item(
    product_id: str,
    controller: AppSessionController = Depends(get_controller),
):
    """Remove a line."""
    controller.remove_from_cart(product_id)
    return _cart_response(controller)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    controller: AppSessionController = Depends(get_controller),
):
    """Empty the cart."""
    controller.clear_cart()
    return _cart_response(controller)
