"""Multi-strategy JSON extraction for model completions.

Models wrap JSON in code fences, prepend a sentence of commentary, or trail off
with a sign-off. Extraction runs an ordered list of strategies, each a pure
function from text to an optional object, and the first hit wins:

1. code_fence_strip  - drop a wrapping ```json fence, parse the rest
2. outer_braces      - first "{" through last "}"
3. fenced_block      - a fenced block anywhere in the text holding an object
4. balanced_braces   - first "{" up to its matching "}" (string aware)

Only JSON objects count; arrays and scalars are treated as misses. After
extraction the two top-level keys are required, nested fields are left to the
pipeline.
"""

import json
import re
from collections.abc import Callable
from typing import NamedTuple

from ..errors import ParseFailure, SchemaFailure
from ..logging import clip, logger

REQUIRED_KEYS = ("worldClass", "notApproved")

PREVIEW_CHARS = 200

_FENCE_OPEN = re.compile(r"^```[\w-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")
_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


class ExtractionStrategy(NamedTuple):
    name: str
    extract: Callable[[str], dict | None]


def _loads_object(candidate: str) -> dict | None:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def strip_code_fence(raw: str) -> dict | None:
    text = raw.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return _loads_object(text.strip())


def outer_braces(raw: str) -> dict | None:
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end <= start:
        return None
    return _loads_object(raw[start : end + 1])


def fenced_block(raw: str) -> dict | None:
    match = _FENCED_OBJECT.search(raw)
    if match is None:
        return None
    return _loads_object(match.group(1))


def balanced_braces(raw: str) -> dict | None:
    start = raw.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(raw)):
        ch = raw[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return _loads_object(raw[start : i + 1])
    # Unterminated object, usually a completion cut off by max_tokens
    return None


STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("code_fence_strip", strip_code_fence),
    ExtractionStrategy("outer_braces", outer_braces),
    ExtractionStrategy("fenced_block", fenced_block),
    ExtractionStrategy("balanced_braces", balanced_braces),
)


def extract_json(raw: str) -> dict | None:
    for strategy in STRATEGIES:
        data = strategy.extract(raw)
        if data is not None:
            if strategy is not STRATEGIES[0]:
                logger.debug(f"Extracted JSON with fallback strategy '{strategy.name}'")
            return data
    return None


def parse_generation(raw: str) -> dict:
    """Extract the worldClass/notApproved object from a completion.

    Raises ParseFailure when no strategy yields an object and SchemaFailure
    when a required top-level key is absent.
    """
    data = extract_json(raw)
    if data is None:
        preview = clip(raw, PREVIEW_CHARS)
        logger.warning(f"Failed to extract JSON from model output (length={len(raw)}): {preview}")
        raise ParseFailure(len(raw), preview)

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise SchemaFailure(f"Model output is missing required keys: {', '.join(missing)}")

    return data


def coerce_text(value: object, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SchemaFailure(f"{key}.text must be a non-empty string")
    return value


def coerce_criteria(value: object) -> list[str] | None:
    """A list of strings, or None when the field is absent or malformed."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return [v.strip() for v in value]
