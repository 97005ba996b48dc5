import json

import pytest
from fastapi.testclient import TestClient

from src.exemplar_service.criteria.catalog import get_criteria
from src.exemplar_service.engine.model_client import UnconfiguredModelClient
from src.exemplar_service.engine.pipeline import ExamplePipeline
from src.exemplar_service.main import app
from src.exemplar_service.storage.comparisons import ComparisonStore

ES_WORLD_CLASS = (
    "Goal\nMy goal is to show how the water cycle works.\n\n"
    "Process\nI read a book. I drew each stage. I asked my teacher for help.\n\n"
    "Evidence\n[Photo: my labeled poster]\n\n"
    "Reflection\nI learned that clouds hold tiny drops. Next I will add arrows.\n\n"
    "Peer Feedback\nMaya said my labels were small. I made them bigger.\n\n"
    "Next Step\nI will share it with the students in my studio."
)

ES_NOT_APPROVED = "Goal\nI made a poster.\n\nProcess\nI worked on it.\n\nReflection\nIt was fine."


def model_payload(studio: str = "ES", **overrides) -> dict:
    criteria = get_criteria(studio)
    payload = {
        "worldClass": {"text": ES_WORLD_CLASS, "criteriaCovered": criteria[:3]},
        "notApproved": {"text": ES_NOT_APPROVED, "criteriaMissing": criteria[3:5]},
    }
    payload.update(overrides)
    return payload


class MockModelClient:
    configured = True
    model_id = "mock-model"

    def __init__(self, output: str | None = None, error: Exception | None = None):
        self.output = output if output is not None else json.dumps(model_payload())
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    async def generate(self, system_prompt, user_prompt, studio):
        self.calls.append((system_prompt, user_prompt, studio))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def es_criteria() -> list[str]:
    return get_criteria("ES")


@pytest.fixture
def mock_model_response() -> str:
    return json.dumps(model_payload())


@pytest.fixture
def mock_model_client(mock_model_response) -> MockModelClient:
    return MockModelClient(mock_model_response)


@pytest.fixture
def client(mock_model_client):
    app.state.model_client = mock_model_client
    app.state.pipeline = ExamplePipeline(mock_model_client)
    app.state.comparisons = ComparisonStore()
    return TestClient(app)


@pytest.fixture
def unconfigured_client():
    model_client = UnconfiguredModelClient()
    app.state.model_client = model_client
    app.state.pipeline = ExamplePipeline(model_client)
    app.state.comparisons = ComparisonStore()
    return TestClient(app)
