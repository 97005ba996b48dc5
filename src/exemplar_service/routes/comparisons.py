"""
Saved comparison endpoints.

POST /api/comparisons        save a generated comparison
GET  /api/comparisons        list, filtered by studio and title/prompt search
GET  /api/comparisons/{id}   fetch one comparison
"""

from fastapi import APIRouter, HTTPException, Request

from ..schemas.request import SaveComparisonRequest
from ..schemas.response import Comparison, ComparisonListResponse, SaveComparisonResponse
from ..schemas.studio import Studio
from ..storage.comparisons import ComparisonStore

router = APIRouter(prefix="/api")


def _store(request: Request) -> ComparisonStore:
    store = getattr(request.app.state, "comparisons", None)
    if store is None:
        store = ComparisonStore()
        request.app.state.comparisons = store
    return store


@router.post("/comparisons", response_model=SaveComparisonResponse, status_code=201)
async def save_comparison(request: Request, body: SaveComparisonRequest) -> SaveComparisonResponse:
    comparison = _store(request).save(body)
    return SaveComparisonResponse(id=comparison.id)


@router.get("/comparisons", response_model=ComparisonListResponse, response_model_exclude_none=True)
async def list_comparisons(
    request: Request, studio: Studio | None = None, search: str | None = None
) -> ComparisonListResponse:
    comparisons = _store(request).list_comparisons(studio=studio, search=search)
    return ComparisonListResponse(comparisons=comparisons)


@router.get(
    "/comparisons/{comparison_id}", response_model=Comparison, response_model_exclude_none=True
)
async def get_comparison(request: Request, comparison_id: str) -> Comparison:
    comparison = _store(request).get(comparison_id)
    if comparison is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "COMPARISON_NOT_FOUND", "message": f"Comparison '{comparison_id}' not found"},
        )
    return comparison
