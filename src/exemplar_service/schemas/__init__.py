"""
Schemas for the exemplar service API.
"""

from .request import GenerateExamplesRequest, SaveComparisonRequest
from .response import (
    Comparison,
    ComparisonListResponse,
    Example,
    GenerationResult,
    SaveComparisonResponse,
)
from .studio import STUDIO_CODES, STUDIO_NAMES, CriteriaListResponse, CriteriaSet, Studio

__all__ = [
    "Comparison",
    "ComparisonListResponse",
    "CriteriaListResponse",
    "CriteriaSet",
    "Example",
    "GenerateExamplesRequest",
    "GenerationResult",
    "STUDIO_CODES",
    "STUDIO_NAMES",
    "SaveComparisonRequest",
    "SaveComparisonResponse",
    "Studio",
]
