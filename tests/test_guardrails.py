from src.exemplar_service.config import GuardrailsConfig
from src.exemplar_service.criteria.catalog import get_criteria
from src.exemplar_service.engine.fallback import build_fallback_result
from src.exemplar_service.policy import guardrails
from src.exemplar_service.policy.guardrails import (
    check_criteria_subset,
    check_disallowed_terms,
    check_missing_evidence_contradiction,
    check_word_band,
    run_guardrails,
)
from src.exemplar_service.schemas.response import Example, GenerationResult


def _result(studio="ES", world_text="Goal\nShort.", not_text="Goal\nShort.", covered=None, missing=None):
    criteria = get_criteria(studio)
    return GenerationResult(
        world_class=Example(text=world_text, criteria_covered=criteria[:3] if covered is None else covered),
        not_approved=Example(text=not_text, criteria_missing=criteria[3:5] if missing is None else missing),
        criteria_all=criteria,
    )


class TestCriteriaSubset:
    def test_catalog_entries_pass(self):
        result = _result()
        assert check_criteria_subset(result, "ES", result.criteria_all) == []

    def test_unknown_entry_flagged(self):
        result = _result(covered=["Uses colorful fonts"])
        warnings = check_criteria_subset(result, "ES", result.criteria_all)
        assert len(warnings) == 1
        assert "Uses colorful fonts" in warnings[0]

    def test_paraphrase_flagged(self):
        result = _result(missing=["Reflection includes one thing learned"])
        assert check_criteria_subset(result, "ES", result.criteria_all)


class TestWordBand:
    def test_es_over_limit(self):
        result = _result(world_text="word " * 201)
        warnings = check_word_band(result, "ES", result.criteria_all, GuardrailsConfig())
        assert warnings and "200" in warnings[0]

    def test_es_at_limit(self):
        result = _result(world_text="word " * 200)
        assert check_word_band(result, "ES", result.criteria_all, GuardrailsConfig()) == []

    def test_lp_under_limit(self):
        result = _result("LP", world_text="word " * 400, not_text="word " * 100)
        warnings = check_word_band(result, "LP", result.criteria_all, GuardrailsConfig())
        assert len(warnings) == 1
        assert "notApproved" in warnings[0]
        assert "worldClass" not in warnings[0]

    def test_ms_unbounded(self):
        result = _result("MS", world_text="word " * 1000, not_text="one")
        assert check_word_band(result, "MS", result.criteria_all, GuardrailsConfig()) == []


class TestEvidenceContradiction:
    def test_evidence_shown_while_missing(self):
        result = _result(not_text="Goal\nI made a poster.\n\nEvidence\n[Photo: poster]")
        warnings = check_missing_evidence_contradiction(result, "ES", result.criteria_all)
        assert len(warnings) == 1
        assert warnings[0].startswith("Contradiction: notApproved misses an evidence criterion")

    def test_sources_shown_while_missing(self):
        result = _result(not_text="Goal\nI made a poster.\nMy source was a library book.")
        warnings = check_missing_evidence_contradiction(result, "ES", result.criteria_all)
        assert any("source criterion" in w for w in warnings)

    def test_section_heading_alone_is_fine(self):
        result = _result(not_text="Goal\nI made a poster.\n\nEvidence\n(Nothing attached)\n\nSources:\nNot listed.")
        assert check_missing_evidence_contradiction(result, "ES", result.criteria_all) == []

    def test_criteria_not_missing(self):
        result = _result(not_text="Evidence\n[Photo: poster]", missing=[])
        assert check_missing_evidence_contradiction(result, "ES", result.criteria_all) == []


class TestDisallowedTerms:
    def test_flags_leftovers(self):
        result = _result(world_text="My teacher helped.")
        warnings = check_disallowed_terms(result, "ES", result.criteria_all)
        assert warnings == ["worldClass text still uses disallowed terms: ['teacher']"]


class TestRunGuardrails:
    def test_all_clear(self):
        result = _result()
        report = run_guardrails(result, "ES", result.criteria_all)
        assert report.all_clear

    def test_fallback_results_clean_for_es_and_ms(self):
        for studio in ("ES", "MS"):
            result = build_fallback_result(studio, "Explain the water cycle", "MODEL_FAILURE: x")
            report = run_guardrails(result, studio, result.criteria_all)
            assert report.all_clear, report.warnings

    def test_lp_fallback_world_class_within_band(self):
        result = build_fallback_result("LP", "Pitch a product", "MODEL_FAILURE: x")
        report = run_guardrails(result, "LP", result.criteria_all, GuardrailsConfig())
        assert len(report.warnings) == 1
        assert "notApproved" in report.warnings[0]
        assert "worldClass" not in report.warnings[0]

    def test_band_from_given_config(self):
        result = _result(world_text="one two three four five six")
        assert run_guardrails(result, "ES", result.criteria_all).all_clear
        report = run_guardrails(result, "ES", result.criteria_all, GuardrailsConfig(es_max_words=5))
        assert report.warnings == ["ES text exceeds 5 words: {'worldClass': 6}"]

    def test_collects_all_warnings(self):
        result = _result(world_text="The students " + "word " * 250, covered=["Invented"])
        report = run_guardrails(result, "ES", result.criteria_all)
        assert len(report.warnings) == 3

    def test_erroring_check_reported(self, monkeypatch):
        def broken(result, studio, criteria, config):
            raise RuntimeError("boom")

        monkeypatch.setattr(guardrails, "CHECKS", (broken, guardrails.check_criteria_subset))
        result = _result(covered=["Invented"])
        report = run_guardrails(result, "ES", result.criteria_all)

        assert report.warnings[0] == "Guardrail check broken could not run: boom"
        assert len(report.warnings) == 2
