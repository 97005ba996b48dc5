"""
Schemas for generation and save requests.
"""

from typing import Any, Literal

from pydantic import Field

from .base import CamelModel
from .response import Example
from .studio import Studio


class GenerateExamplesRequest(CamelModel):
    # Untyped so that missing, blank and non-string values reach the pipeline's 400 handling
    prompt_text: Any = None
    studio: Any = None


class SaveComparisonRequest(CamelModel):
    title: str | None = None
    studio: Studio
    prompt_text: str = Field(min_length=1)
    world_class: Example
    not_approved: Example
    created_by_role: Literal["Learner", "Guide"] = "Learner"
    is_mock_data: bool = False
