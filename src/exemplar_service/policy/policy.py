"""
Criteria defaulting policy.

When the model leaves out criteriaCovered / criteriaMissing (or returns
something that is not a list of strings) the pipeline fills them from fixed
slices of the studio criteria. Fallback results use the same slices. The slice
bounds come from the ``defaults`` section of the policy config.
"""

from ..config import DefaultsConfig, policy_config


def default_criteria_covered(criteria: list[str], defaults: DefaultsConfig | None = None) -> list[str]:
    defaults = defaults or policy_config.defaults
    return list(criteria[defaults.covered_start : defaults.covered_end])


def default_criteria_missing(criteria: list[str], defaults: DefaultsConfig | None = None) -> list[str]:
    defaults = defaults or policy_config.defaults
    return list(criteria[defaults.missing_start : defaults.missing_end])


def apply_criteria_defaults(
    covered: list[str] | None,
    missing: list[str] | None,
    criteria: list[str],
    defaults: DefaultsConfig | None = None,
) -> tuple[list[str], list[str]]:
    if covered is None:
        covered = default_criteria_covered(criteria, defaults)
    if missing is None:
        missing = default_criteria_missing(criteria, defaults)
    return covered, missing
