"""
Admin backoffice endpoints.
"""

from fastapi import APIRouter, Depends

from niklaus.api.dependencies import get_controller
from niklaus.application.dto.requests import EntityUpsertRequest, ProductUpsertRequest
from niklaus.application.dto.responses import (
    BackofficeResponse,
    EntityResponse,
    ErrorResponse,
    ProductResponse,
)
from niklaus.application.session_controller import AppSessionController

router = APIRouter(prefix="/api/backoffice", tags=["backoffice"])


@router.get("", response_model=BackofficeResponse)
async def get_backoffice(
    controller: AppSessionController = Depends(get_controller),
):
    """Backoffice content; empty for non-admin profiles."""
    content = controller.backoffice_content()
    if content is None:
        return BackofficeResponse(available=False)

    return BackofficeResponse(
        available=True,
        entities=[EntityResponse.from_entity(e) for e in content.entities],
        products=[ProductResponse.from_product(p) for p in content.products],
    )


@router.put(
    "/entities",
    response_model=EntityResponse,
    responses={403: {"model": ErrorResponse, "description": "Admin only"}},
)
async def upsert_entity(
    request: EntityUpsertRequest,
    controller: AppSessionController = Depends(get_controller),
):
    """Create or replace an entity."""
    entity = await controller.upsert_entity(request.to_entity())
    return EntityResponse.from_entity(entity)


@router.put(
    "/products",
    response_model=ProductResponse,
    responses={403: {"model": ErrorResponse, "description": "Admin only"}},
)
async def upsert_product(
    request: ProductUpsertRequest,
    controller: AppSessionController = Depends(get_controller),
):
    """Create or replace a product."""
    product = await controller.upsert_product(request.to_product())
    return ProductResponse.from_product(product)
