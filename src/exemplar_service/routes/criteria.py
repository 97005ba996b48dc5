"""GET /api/criteria endpoints listing the rubric criteria per studio."""

from fastapi import APIRouter, HTTPException

from ..criteria.catalog import get_criteria, is_known_studio, list_criteria_sets
from ..schemas.studio import STUDIO_NAMES, CriteriaListResponse, CriteriaSet

router = APIRouter(prefix="/api")


@router.get("/criteria", response_model=CriteriaListResponse)
async def list_criteria() -> CriteriaListResponse:
    return CriteriaListResponse(studios=list_criteria_sets())


@router.get("/criteria/{studio}", response_model=CriteriaSet)
async def studio_criteria(studio: str) -> CriteriaSet:
    if not is_known_studio(studio):
        raise HTTPException(
            status_code=404,
            detail={"code": "STUDIO_NOT_FOUND", "message": f"Studio '{studio}' not found"},
        )
    return CriteriaSet(studio=studio, name=STUDIO_NAMES[studio], criteria=get_criteria(studio))
