"""Evaluation checker utilities.

Provides schema validation, criteria stability across repeated runs,
guardrail scoring of live responses, latency statistics (mean/p95) and
per-case expectation checks.
"""

from pydantic import ValidationError

from src.exemplar_service.policy.guardrails import run_guardrails
from src.exemplar_service.schemas.response import GenerationResult


def validate_schema(response_data: dict) -> tuple[bool, str]:
    try:
        GenerationResult.model_validate(response_data)
        return True, ""
    except ValidationError as e:
        return False, str(e)


def check_criteria_stability(runs: list[dict]) -> dict:
    """Share of runs whose covered/missing criteria match the first run."""
    if len(runs) < 2:
        return {"covered_stability": 1.0, "missing_stability": 1.0}

    def _covered(run: dict) -> set:
        return set(run.get("worldClass", {}).get("criteriaCovered") or [])

    def _missing(run: dict) -> set:
        return set(run.get("notApproved", {}).get("criteriaMissing") or [])

    baseline, others = runs[0], runs[1:]
    covered_matches = sum(1 for r in others if _covered(r) == _covered(baseline))
    missing_matches = sum(1 for r in others if _missing(r) == _missing(baseline))

    return {
        "covered_stability": covered_matches / len(others),
        "missing_stability": missing_matches / len(others),
    }


def guardrail_warnings(response_data: dict, studio: str) -> list[str]:
    result = GenerationResult.model_validate(response_data)
    return run_guardrails(result, studio, result.criteria_all).warnings


def compute_latency_stats(latencies: list[int]) -> dict:
    if not latencies:
        return {"mean_ms": 0, "min_ms": 0, "max_ms": 0, "p95_ms": 0}

    latencies_sorted = sorted(latencies)
    mean = sum(latencies) / len(latencies)
    p95_idx = int(len(latencies_sorted) * 0.95)
    p95 = latencies_sorted[min(p95_idx, len(latencies_sorted) - 1)]

    return {
        "mean_ms": int(mean),
        "min_ms": latencies_sorted[0],
        "max_ms": latencies_sorted[-1],
        "p95_ms": p95,
    }


def check_expectations(response_data: dict, expectations: dict, studio: str = "ES") -> list[dict]:
    """Check response against case expectations.

    Returns list of {"check": str, "passed": bool, "detail": str}.
    """
    results = []

    expected_status = expectations.get("expected_status")
    if expected_status is not None:
        status = response_data.get("_status_code", 200)
        results.append({
            "check": "expected_status",
            "passed": status == expected_status,
            "detail": f"got {status} (expected {expected_status})",
        })
        if status != 200:
            return results

    expect_mock = expectations.get("expect_mock")
    if expect_mock is not None:
        is_mock = bool(response_data.get("isMockData"))
        results.append({
            "check": "expect_mock",
            "passed": is_mock == expect_mock,
            "detail": f"isMockData={is_mock}" + (f" apiError={response_data.get('apiError')}" if is_mock else ""),
        })

    fragment = expectations.get("world_class_contains")
    if fragment:
        text = response_data.get("worldClass", {}).get("text", "")
        passed = fragment.lower() in text.lower()
        results.append({
            "check": "world_class_contains",
            "passed": passed,
            "detail": f"'{fragment}' {'found' if passed else 'NOT found'} in worldClass.text",
        })

    criteria_count = expectations.get("criteria_all_count")
    if criteria_count is not None:
        found = len(response_data.get("criteriaAll", []))
        results.append({
            "check": "criteria_all_count",
            "passed": found == criteria_count,
            "detail": f"{found} (expected {criteria_count})",
        })

    max_warnings = expectations.get("max_guardrail_warnings")
    if max_warnings is not None:
        warnings = guardrail_warnings(response_data, studio)
        results.append({
            "check": "max_guardrail_warnings",
            "passed": len(warnings) <= max_warnings,
            "detail": f"{len(warnings)} warning(s) (max {max_warnings})"
            + (f": {warnings[0][:80]}" if warnings else ""),
        })

    return results
