import pytest
from pydantic import ValidationError

from src.exemplar_service.schemas.request import GenerateExamplesRequest
from src.exemplar_service.schemas.response import Example, GenerationResult
from src.exemplar_service.schemas.studio import CriteriaSet


def _result(**overrides):
    values = {
        "world_class": Example(text="Goal\nA", criteria_covered=["one"]),
        "not_approved": Example(text="Goal\nB", criteria_missing=["two"]),
        "criteria_all": ["one", "two"],
    }
    values.update(overrides)
    return GenerationResult(**values)


class TestGenerateExamplesRequest:
    def test_camel_case_input(self):
        req = GenerateExamplesRequest.model_validate({"promptText": "Seeds", "studio": "ES"})
        assert req.prompt_text == "Seeds"
        assert req.studio == "ES"

    def test_snake_case_input(self):
        req = GenerateExamplesRequest(prompt_text="Seeds", studio="ES")
        assert req.prompt_text == "Seeds"

    def test_fields_optional(self):
        req = GenerateExamplesRequest.model_validate({})
        assert req.prompt_text is None
        assert req.studio is None


class TestGenerationResult:
    def test_wire_shape(self):
        data = _result().model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "worldClass": {"text": "Goal\nA", "criteriaCovered": ["one"]},
            "notApproved": {"text": "Goal\nB", "criteriaMissing": ["two"]},
            "criteriaAll": ["one", "two"],
            "isMockData": False,
        }

    def test_fallback_carries_api_error(self):
        result = _result(is_mock_data=True, api_error="MODEL_FAILURE: down")
        assert result.model_dump(by_alias=True)["apiError"] == "MODEL_FAILURE: down"

    def test_api_error_requires_mock(self):
        with pytest.raises(ValidationError):
            _result(api_error="MODEL_FAILURE: down")

    def test_frozen(self):
        result = _result()
        with pytest.raises(ValidationError):
            result.is_mock_data = True

    def test_example_frozen(self):
        example = Example(text="Goal")
        with pytest.raises(ValidationError):
            example.text = "Other"


class TestCriteriaSet:
    def test_invalid_studio(self):
        with pytest.raises(ValidationError):
            CriteriaSet(studio="XX", name="Unknown", criteria=[])
