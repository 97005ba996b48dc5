"""
Advisory guardrails over a finished GenerationResult.

Each check is independent and all of them run:
- criteria_subset: covered/missing entries must appear verbatim in the studio criteria
- word_band: ES texts stay short, LP texts run long
- missing_evidence_contradiction: a not-approved example that "misses" the
  evidence or source criterion must not show evidence or sources anyway
- disallowed_terms: no conventional-school vocabulary left in the text

Nothing here raises or blocks a response; the pipeline logs the warnings.
"""

import re
from collections.abc import Callable

from pydantic import BaseModel, Field

from ..config import GuardrailsConfig, policy_config
from ..engine.normalizer import find_disallowed_terms
from ..logging import logger
from ..schemas.response import GenerationResult

EVIDENCE_MARKERS = re.compile(r"\[[^\]\n]+\]|\b(?:links?|photos?|evidence|attachments?)\b", re.IGNORECASE)
SOURCE_MARKERS = re.compile(r"\b(?:sources?|citations?|references?|authors?|titles?)\b", re.IGNORECASE)

# Lines that only name a section ("Evidence", "Sources", ...) say nothing about content
SECTION_HEADINGS = {
    "goal",
    "process",
    "evidence",
    "reflection",
    "peer feedback",
    "next step",
    "sources",
    "citations",
    "method",
    "findings",
    "overview",
    "world-class comparison",
    "stakeholder/exhibition",
    "reflection & next iteration",
}


class GuardrailReport(BaseModel):
    warnings: list[str] = Field(default_factory=list)

    @property
    def all_clear(self) -> bool:
        return not self.warnings


def _body_lines(text: str) -> str:
    lines = [
        line
        for line in text.splitlines()
        if line.strip().rstrip(":").lower() not in SECTION_HEADINGS
    ]
    return "\n".join(lines)


def word_count(text: str) -> int:
    return len(text.split())


def check_criteria_subset(
    result: GenerationResult,
    studio: str,
    criteria: list[str],
    config: GuardrailsConfig | None = None,
) -> list[str]:
    known = set(criteria)
    warnings = []
    for label, entries in (
        ("worldClass.criteriaCovered", result.world_class.criteria_covered or []),
        ("notApproved.criteriaMissing", result.not_approved.criteria_missing or []),
    ):
        unknown = [c for c in entries if c not in known]
        if unknown:
            warnings.append(f"{label} has criteria not in the {studio} list: {unknown}")
    return warnings


def check_word_band(
    result: GenerationResult,
    studio: str,
    criteria: list[str],
    config: GuardrailsConfig | None = None,
) -> list[str]:
    config = config or policy_config.guardrails
    counts = {
        "worldClass": word_count(result.world_class.text),
        "notApproved": word_count(result.not_approved.text),
    }
    warnings = []
    if studio == "ES":
        over = {k: n for k, n in counts.items() if n > config.es_max_words}
        if over:
            warnings.append(f"ES text exceeds {config.es_max_words} words: {over}")
    elif studio == "LP":
        under = {k: n for k, n in counts.items() if n < config.lp_min_words}
        if under:
            warnings.append(f"LP text is under {config.lp_min_words} words: {under}")
    return warnings


def check_missing_evidence_contradiction(
    result: GenerationResult,
    studio: str,
    criteria: list[str],
    config: GuardrailsConfig | None = None,
) -> list[str]:
    missing = [c.lower() for c in result.not_approved.criteria_missing or []]
    body = _body_lines(result.not_approved.text)
    warnings = []

    if any("evidence" in c for c in missing):
        markers = sorted({m.group(0) for m in EVIDENCE_MARKERS.finditer(body)})
        if markers:
            warnings.append(
                f"Contradiction: notApproved misses an evidence criterion but its text shows evidence {markers}"
            )
    if any("source" in c for c in missing):
        markers = sorted({m.group(0) for m in SOURCE_MARKERS.finditer(body)})
        if markers:
            warnings.append(
                f"Contradiction: notApproved misses a source criterion but its text cites sources {markers}"
            )
    return warnings


def check_disallowed_terms(
    result: GenerationResult,
    studio: str,
    criteria: list[str],
    config: GuardrailsConfig | None = None,
) -> list[str]:
    warnings = []
    for label, example in (("worldClass", result.world_class), ("notApproved", result.not_approved)):
        terms = find_disallowed_terms(example.text)
        if terms:
            warnings.append(f"{label} text still uses disallowed terms: {terms}")
    return warnings


CHECKS: tuple[Callable[[GenerationResult, str, list[str], GuardrailsConfig], list[str]], ...] = (
    check_criteria_subset,
    check_word_band,
    check_missing_evidence_contradiction,
    check_disallowed_terms,
)


def run_guardrails(
    result: GenerationResult,
    studio: str,
    criteria: list[str],
    config: GuardrailsConfig | None = None,
) -> GuardrailReport:
    config = config or policy_config.guardrails
    report = GuardrailReport()
    for check in CHECKS:
        try:
            report.warnings.extend(check(result, studio, criteria, config))
        except Exception as e:
            logger.exception(f"Guardrail check {check.__name__} errored")
            report.warnings.append(f"Guardrail check {check.__name__} could not run: {e}")
    return report
