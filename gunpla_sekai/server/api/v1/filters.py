"""
Filter Data Endpoint.

Option lists for the kit browser's filter panel.
"""

from fastapi import APIRouter

from gunpla_sekai.core.models.io.catalog import FilterData
from gunpla_sekai.server.services.deps import CatalogServiceDep

router = APIRouter(tags=["filters"])


@router.get(
    "",
    response_model=FilterData,
    summary="Get Filter Data",
    description="Retrieve product lines, mobile suits, series and release types, each sorted by name.",
    response_description="Filter option lists.",
)
async def get_filter_data(service: CatalogServiceDep) -> FilterData:
    return await service.filter_data()
