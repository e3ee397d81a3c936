"""
Product Line Endpoints.

Product lines are the sub-brands within a grade (e.g. HGUC, HG Iron-Blooded Orphans).
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from gunpla_sekai.core.models.io.catalog import KitSummary, ProductLineRead
from gunpla_sekai.server.services.deps import CatalogServiceDep

router = APIRouter(tags=["product-lines"])


@router.get(
    "",
    response_model=List[ProductLineRead],
    summary="List Product Lines",
    description="Retrieve all product lines with their grade and kit count.",
    response_description="A list of product lines.",
)
async def list_product_lines(service: CatalogServiceDep) -> List[ProductLineRead]:
    return await service.list_product_lines()


@router.get(
    "/{product_line_id}/kits",
    response_model=List[KitSummary],
    summary="List Kits of a Product Line",
    description="Retrieve the kits released in a product line.",
    response_description="A page of kits.",
    responses={
        200: {"description": "Kits retrieved"},
        404: {"description": "Product line not found"},
    },
)
async def list_product_line_kits(
    product_line_id: str,
    service: CatalogServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> List[KitSummary]:
    return await service.kits_for_product_line(product_line_id, limit, offset)


@router.get(
    "/{slug}",
    response_model=ProductLineRead,
    summary="Get Product Line",
    description="Retrieve a product line by slug.",
    response_description="The product line.",
    responses={
        200: {"description": "Product line found"},
        404: {"description": "Product line not found"},
    },
)
async def get_product_line(slug: str, service: CatalogServiceDep) -> ProductLineRead:
    return await service.get_product_line(slug)
