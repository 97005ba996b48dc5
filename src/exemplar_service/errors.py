"""Error taxonomy for the generation pipeline.

Only ValidationFailure reaches callers; the model-path failures are recovered
by the pipeline, which turns them into a fallback result whose apiError is the
failure's diagnostic string.
"""


class GenerationError(Exception):
    code = "GENERATION_FAILED"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    @property
    def diagnostic(self) -> str:
        return f"{self.code}: {self.message}"


class ValidationFailure(GenerationError):
    code = "INVALID_REQUEST"


class CompletionFailure(GenerationError):
    code = "MODEL_FAILURE"


class ParseFailure(GenerationError):
    code = "MODEL_PARSE_FAILURE"

    def __init__(self, length: int, preview: str):
        super().__init__(f"No JSON object found in model output (length={length})")
        self.length = length
        self.preview = preview


class SchemaFailure(GenerationError):
    code = "MODEL_SCHEMA_FAILURE"
