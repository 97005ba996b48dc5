"""
POST /api/generate-examples endpoint.

Validates the studio and project prompt, then runs the generation pipeline.
Answers 200 with the result shape on every generation outcome, including the
fallback examples; only malformed requests get a 400.
"""

from fastapi import APIRouter, HTTPException, Request, Response

from ..engine.pipeline import ExamplePipeline
from ..errors import ValidationFailure
from ..logging import get_request_id, request_id_ctx
from ..schemas.request import GenerateExamplesRequest
from ..schemas.response import GenerationResult

router = APIRouter(prefix="/api")


@router.post(
    "/generate-examples",
    response_model=GenerationResult,
    response_model_exclude_none=True,
)
async def generate_examples(
    request: Request, response: Response, body: GenerateExamplesRequest
) -> GenerationResult:
    request_id_ctx.set(request.headers.get("x-request-id") or "")
    response.headers["X-Request-ID"] = get_request_id()

    pipeline: ExamplePipeline | None = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise HTTPException(
            status_code=503,
            detail={"code": "PIPELINE_UNAVAILABLE", "message": "Generation pipeline not initialized"},
        )

    try:
        return await pipeline.generate(body.prompt_text, body.studio)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail={"code": e.code, "message": e.message})
