"""FastAPI application entry point.

The lifespan handler picks the completion client variant from the configured
credentials, builds the generation pipeline around it and creates the
in-memory comparison store. All state is stored on app.state for access by
route handlers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import policy_config, settings
from .engine.model_client import create_model_client
from .engine.pipeline import ExamplePipeline
from .logging import logger, print_settings
from .routes import comparisons_router, criteria_router, generate_router, health_router
from .storage.comparisons import ComparisonStore

logger.info("Starting Exemplar Service")

# Print settings with sensitive data masked
print_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    model_client = create_model_client(settings, policy_config)
    app.state.model_client = model_client
    app.state.pipeline = ExamplePipeline(model_client, policy_config)
    app.state.comparisons = ComparisonStore()
    if model_client.configured:
        base_url = settings.openai_base_url or "api.openai.com"
        logger.info(f"Model client initialized: {base_url} / {settings.model_id}")

    yield


app = FastAPI(title="JourneyTracker Exemplar Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(criteria_router)
app.include_router(generate_router)
app.include_router(comparisons_router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
