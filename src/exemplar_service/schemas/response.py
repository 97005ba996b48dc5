from typing import Literal

from pydantic import ConfigDict, Field, model_validator

from .base import CamelModel
from .studio import Studio


class Example(CamelModel):
    model_config = ConfigDict(frozen=True)

    text: str
    criteria_covered: list[str] | None = None
    criteria_missing: list[str] | None = None


class GenerationResult(CamelModel):
    model_config = ConfigDict(frozen=True)

    world_class: Example
    not_approved: Example
    criteria_all: list[str]
    is_mock_data: bool = False
    api_error: str | None = None

    @model_validator(mode="after")
    def _api_error_only_on_mock(self) -> "GenerationResult":
        if self.api_error is not None and not self.is_mock_data:
            raise ValueError("api_error is only set on fallback results")
        return self


class Comparison(CamelModel):
    id: str
    title: str
    studio: Studio
    prompt_text: str
    world_class: Example
    not_approved: Example
    created_at: str
    created_by_role: Literal["Learner", "Guide"] = "Learner"
    is_mock_data: bool = False


class SaveComparisonResponse(CamelModel):
    id: str


class ComparisonListResponse(CamelModel):
    comparisons: list[Comparison] = Field(default_factory=list)
