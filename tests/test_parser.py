import json

import pytest

from src.exemplar_service.engine.parser import (
    STRATEGIES,
    balanced_braces,
    coerce_criteria,
    coerce_text,
    extract_json,
    fenced_block,
    outer_braces,
    parse_generation,
    strip_code_fence,
)
from src.exemplar_service.errors import ParseFailure, SchemaFailure

PAIR = {
    "worldClass": {"text": "Goal\nMy goal is…", "criteriaCovered": ["a"]},
    "notApproved": {"text": "Goal\nI did it.", "criteriaMissing": ["b"]},
}


class TestStrategies:
    def test_order_is_fixed(self):
        assert [s.name for s in STRATEGIES] == [
            "code_fence_strip",
            "outer_braces",
            "fenced_block",
            "balanced_braces",
        ]

    def test_strip_code_fence_plain_json(self):
        assert strip_code_fence('{"a": 1}') == {"a": 1}

    def test_strip_code_fence_wrapped(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == {"a": 1}

    def test_strip_code_fence_without_label(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == {"a": 1}

    def test_strip_code_fence_rejects_prose(self):
        assert strip_code_fence('Here you go: {"a": 1}') is None

    def test_outer_braces_with_prose(self):
        assert outer_braces('Sure! {"a": {"b": 2}} Enjoy.') == {"a": {"b": 2}}

    def test_outer_braces_no_braces(self):
        assert outer_braces("nothing here") is None

    def test_fenced_block_inside_prose(self):
        raw = 'Draft {idea}\n```json\n{"a": 1}\n```\nthat is all }'
        assert outer_braces(raw) is None
        assert fenced_block(raw) == {"a": 1}

    def test_balanced_braces_first_object(self):
        assert balanced_braces('{"a": 1} and then {"b": 2}') == {"a": 1}

    def test_balanced_braces_ignores_braces_in_strings(self):
        raw = '{"text": "use } and { here", "n": 1} trailing }'
        assert balanced_braces(raw) == {"text": "use } and { here", "n": 1}

    def test_balanced_braces_handles_escaped_quotes(self):
        raw = 'x {"text": "she said \\"hi}\\"", "n": 2} y }'
        assert balanced_braces(raw) == {"text": 'she said "hi}"', "n": 2}

    def test_balanced_braces_unterminated(self):
        assert balanced_braces('{"a": {"b": 1}') is None

    def test_arrays_are_not_objects(self):
        assert strip_code_fence("[1, 2, 3]") is None


class TestExtractJson:
    def test_fenced_round_trip(self):
        raw = "```json\n" + json.dumps(PAIR) + "\n```"
        assert extract_json(raw) == PAIR

    def test_prose_around_fenced_block(self):
        raw = "Here is the result:\n```json\n" + json.dumps(PAIR) + "\n```\nHope that helps!"
        assert extract_json(raw) == PAIR

    def test_multiple_objects_take_first(self):
        assert extract_json('{"a": 1} some text {"other": "json"}') == {"a": 1}

    def test_invalid_returns_none(self):
        assert extract_json("no json here") is None

    def test_empty_string(self):
        assert extract_json("") is None


class TestParseGeneration:
    def test_valid_pair(self):
        assert parse_generation(json.dumps(PAIR)) == PAIR

    def test_unparseable_raises_parse_failure(self):
        raw = "I'm sorry, I can't produce that right now."
        with pytest.raises(ParseFailure) as exc_info:
            parse_generation(raw)
        assert exc_info.value.length == len(raw)
        assert "I'm sorry" in exc_info.value.preview
        assert exc_info.value.code == "MODEL_PARSE_FAILURE"

    def test_truncated_completion_raises_parse_failure(self):
        raw = json.dumps(PAIR)[:-20]
        with pytest.raises(ParseFailure):
            parse_generation(raw)

    def test_preview_is_clipped(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_generation("x" * 5000)
        assert len(exc_info.value.preview) <= 203

    def test_missing_not_approved_raises_schema_failure(self):
        with pytest.raises(SchemaFailure, match="notApproved"):
            parse_generation(json.dumps({"worldClass": PAIR["worldClass"]}))

    def test_missing_both_keys(self):
        with pytest.raises(SchemaFailure, match="worldClass, notApproved"):
            parse_generation('{"examples": []}')


class TestCoercion:
    def test_text_passes_through(self):
        assert coerce_text("Goal\nDone.", "worldClass") == "Goal\nDone."

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["text"]])
    def test_bad_text_raises(self, value):
        with pytest.raises(SchemaFailure, match="worldClass.text"):
            coerce_text(value, "worldClass")

    def test_criteria_list(self):
        assert coerce_criteria(["a ", " b"]) == ["a", "b"]

    def test_empty_criteria_list_is_kept(self):
        assert coerce_criteria([]) == []

    @pytest.mark.parametrize("value", [None, "a, b", ["a", 1], {"a": 1}])
    def test_malformed_criteria_treated_as_missing(self, value):
        assert coerce_criteria(value) is None
