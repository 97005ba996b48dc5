"""Example generation pipeline.

Coordinates one request:
1. Validate the prompt text and studio (the only error callers ever see)
2. Build system + user prompts from the studio criteria
3. Call the completion client once
4. Extract and check the JSON object, default missing criteria lists
5. Normalize terminology in the model-written text
6. Run the advisory guardrails and log their warnings

Any completion, parse or schema failure switches to the deterministic fallback
examples, tagged isMockData with the failure in apiError, so the response
schema holds on every path.

The pipeline object is shared by concurrent requests; per-request state lives
in locals only.
"""

import time
from enum import Enum
from typing import Any

from ..config import PolicyConfig, policy_config
from ..criteria.catalog import get_criteria, is_known_studio
from ..errors import CompletionFailure, ParseFailure, SchemaFailure, ValidationFailure
from ..logging import clip, logger
from ..policy.guardrails import GuardrailReport, run_guardrails
from ..policy.policy import apply_criteria_defaults
from ..schemas.response import Example, GenerationResult
from .fallback import build_fallback_result
from .model_client import ModelClient, UnconfiguredModelClient
from .normalizer import normalize_terminology
from .parser import coerce_criteria, coerce_text, parse_generation
from .prompt import build_system_prompt, build_user_prompt


class PipelineState(str, Enum):
    IDLE = "idle"
    BUILDING = "building"
    REQUESTING = "requesting"
    PARSING = "parsing"
    NORMALIZING = "normalizing"
    VALIDATING = "validating"
    FALLBACK = "fallback"
    DONE = "done"


def validate_request(prompt_text: Any, studio: Any) -> tuple[str, str]:
    """Return the trimmed prompt and studio, or raise ValidationFailure."""
    if prompt_text is None or studio is None or not str(studio).strip():
        raise ValidationFailure(
            "Missing required fields: studio and promptText", code="MISSING_FIELDS"
        )
    if not is_known_studio(studio):
        raise ValidationFailure("Invalid studio. Must be ES, MS, or LP", code="INVALID_STUDIO")
    if not isinstance(prompt_text, str):
        raise ValidationFailure("promptText must be a string", code="INVALID_PROMPT")
    prompt_text = prompt_text.strip()
    if not prompt_text:
        raise ValidationFailure("promptText must not be empty", code="EMPTY_PROMPT")
    return prompt_text, studio


def build_model_result(parsed: dict, criteria: list[str], policy: PolicyConfig) -> GenerationResult:
    world_class = parsed["worldClass"]
    not_approved = parsed["notApproved"]
    if not isinstance(world_class, dict) or not isinstance(not_approved, dict):
        raise SchemaFailure("worldClass and notApproved must be objects")

    covered, missing = apply_criteria_defaults(
        coerce_criteria(world_class.get("criteriaCovered")),
        coerce_criteria(not_approved.get("criteriaMissing")),
        criteria,
        policy.defaults,
    )
    return GenerationResult(
        world_class=Example(
            text=coerce_text(world_class.get("text"), "worldClass"),
            criteria_covered=covered,
        ),
        not_approved=Example(
            text=coerce_text(not_approved.get("text"), "notApproved"),
            criteria_missing=missing,
        ),
        criteria_all=criteria,
        is_mock_data=False,
    )


def normalize_result(result: GenerationResult) -> GenerationResult:
    return result.model_copy(
        update={
            "world_class": result.world_class.model_copy(
                update={"text": normalize_terminology(result.world_class.text)}
            ),
            "not_approved": result.not_approved.model_copy(
                update={"text": normalize_terminology(result.not_approved.text)}
            ),
        }
    )


def _enter(state: PipelineState, previous: PipelineState) -> PipelineState:
    logger.debug(f"Pipeline {previous.value} -> {state.value}")
    return state


class ExamplePipeline:
    def __init__(
        self,
        model_client: ModelClient | UnconfiguredModelClient,
        policy: PolicyConfig | None = None,
    ):
        self.model_client = model_client
        self.policy = policy or policy_config

    async def generate(self, prompt_text: Any, studio: Any) -> GenerationResult:
        start_time = time.time()
        state = PipelineState.IDLE

        prompt_text, studio = validate_request(prompt_text, studio)
        criteria = get_criteria(studio)
        logger.info(f"Generating examples for {studio}: {clip(prompt_text, 50)}")

        try:
            state = _enter(PipelineState.BUILDING, state)
            system_prompt = build_system_prompt(studio, criteria)
            user_prompt = build_user_prompt(studio, prompt_text, criteria)

            state = _enter(PipelineState.REQUESTING, state)
            raw_output = await self.model_client.generate(system_prompt, user_prompt, studio)

            state = _enter(PipelineState.PARSING, state)
            parsed = parse_generation(raw_output)
            result = build_model_result(parsed, criteria, self.policy)

            state = _enter(PipelineState.NORMALIZING, state)
            result = normalize_result(result)
        except (CompletionFailure, ParseFailure, SchemaFailure) as e:
            logger.warning(f"Falling back to template examples during {state.value}: {e.diagnostic}")
            state = _enter(PipelineState.FALLBACK, state)
            result = build_fallback_result(studio, prompt_text, e.diagnostic, self.policy)

        state = _enter(PipelineState.VALIDATING, state)
        report = run_guardrails(result, studio, criteria, self.policy.guardrails)
        self._log_report(report)

        _enter(PipelineState.DONE, state)
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Generation complete: studio={studio} mock={result.is_mock_data} "
            f"guardrail_warnings={len(report.warnings)} latency_ms={latency_ms}"
        )
        return result

    @staticmethod
    def _log_report(report: GuardrailReport) -> None:
        for warning in report.warnings:
            logger.warning(f"Guardrail: {warning}")
