"""
GET /health endpoint for liveness checks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    model_client = getattr(request.app.state, "model_client", None)
    configured = bool(model_client is not None and model_client.configured)

    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "model_backend": "configured" if configured else "unconfigured",
    }
