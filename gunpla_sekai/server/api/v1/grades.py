"""
Grade Endpoints.

Grades are the build-scale classes of kits (HG, RG, MG, PG, ...).
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from gunpla_sekai.core.models.io.catalog import GradeDetail, GradeRead, KitSummary
from gunpla_sekai.server.services.deps import CatalogServiceDep

router = APIRouter(tags=["grades"])


@router.get(
    "",
    response_model=List[GradeRead],
    summary="List Grades",
    description="Retrieve all grades with product line and kit counts.",
    response_description="A list of grades.",
)
async def list_grades(service: CatalogServiceDep) -> List[GradeRead]:
    """
    List grades.

    A grade's kit count is the sum over its product lines.
    """
    return await service.list_grades()


@router.get(
    "/{grade_id}/kits",
    response_model=List[KitSummary],
    summary="List Kits of a Grade",
    description="Retrieve the kits of every product line in a grade.",
    response_description="A page of kits.",
    responses={
        200: {"description": "Kits retrieved"},
        404: {"description": "Grade not found"},
    },
)
async def list_grade_kits(
    grade_id: str,
    service: CatalogServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> List[KitSummary]:
    return await service.kits_for_grade(grade_id, limit, offset)


@router.get(
    "/{slug}",
    response_model=GradeDetail,
    summary="Get Grade",
    description="Retrieve a grade with its product lines.",
    response_description="The grade detail.",
    responses={
        200: {"description": "Grade found"},
        404: {"description": "Grade not found"},
    },
)
async def get_grade(slug: str, service: CatalogServiceDep) -> GradeDetail:
    return await service.get_grade(slug)
