"""
Product catalog endpoint.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller
from niklaus.application.dto.responses import ErrorResponse, ProductResponse
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get(
    "",
    response_model=list[ProductResponse],
    responses={400: {"model": ErrorResponse, "description": "No entity selected"}},
)
async def list_products(
    controller: AppSessionController = Depends(get_controller),
):
    """Live catalog for the selected entity."""
    return [ProductResponse.from_product(p) for p in controller.catalog()]
