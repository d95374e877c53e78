import pytest
from pydantic import ValidationError

from common.compliance_engine.evaluator import RuleEvaluator
from common.compliance_engine.handlers.dynamic_rescission import DYNAMIC_RESCISSION
from common.compliance_engine.handlers.language_requirement import LANGUAGE_REQUIREMENT
from common.compliance_engine.handlers.required_disclosure import REQUIRED_DISCLOSURE


def test_language_requirement_missing_language_fires(make_rule, make_action):
    rule = make_rule(logic_type="LANGUAGE_REQUIREMENT", threshold_value=["SPANISH_REQUIRED"], jurisdiction_code="PR")
    res = LANGUAGE_REQUIREMENT().evaluate(rule, make_action(jurisdiction_code="PR"))
    assert res.fired is True
    assert res.recommended_action.startswith("Contract must be provided in SPANISH_REQUIRED")


def test_language_requirement_matches_tag_without_required_suffix(make_rule, make_action):
    rule = make_rule(logic_type="LANGUAGE_REQUIREMENT", threshold_value=["SPANISH_REQUIRED"], jurisdiction_code="PR")

    ok = LANGUAGE_REQUIREMENT().evaluate(rule, make_action(jurisdiction_code="PR", contract_language="English/Spanish"))
    assert ok.fired is False

    bad = LANGUAGE_REQUIREMENT().evaluate(rule, make_action(jurisdiction_code="PR", contract_language="English"))
    assert bad.fired is True
    assert bad.recommended_action.startswith("Provide contract in")


def test_language_requirement_with_no_languages_is_malformed(make_rule, make_action):
    rule = make_rule(logic_type="LANGUAGE_REQUIREMENT", threshold_value=[], jurisdiction_code="PR")
    action = make_action(jurisdiction_code="PR", contract_language="English")

    with pytest.raises(ValidationError):
        LANGUAGE_REQUIREMENT().evaluate(rule, action)
    assert RuleEvaluator().evaluate(rule, action).fired is False


def test_required_disclosure_never_fires_but_reports_text(make_rule, make_action):
    rule = make_rule(
        logic_type="REQUIRED_DISCLOSURE",
        threshold_value="3-day right to cancel",
        category="RESCISSION",
        severity="INFO_ONLY",
    )
    res = REQUIRED_DISCLOSURE().evaluate(rule, make_action())
    assert res.fired is False
    assert res.recommended_action == "Ensure contract includes: 3-day right to cancel"


def test_dynamic_rescission_reports_applicable_period(make_rule, make_action):
    rule = make_rule(
        logic_type="DYNAMIC_RESCISSION",
        threshold_value={"standard": 3, "emergency": 7},
        jurisdiction_code="CA",
        category="RESCISSION",
    )
    standard = DYNAMIC_RESCISSION().evaluate(rule, make_action(jurisdiction_code="CA"))
    assert standard.fired is False
    assert "3-day" in standard.recommended_action

    disaster = DYNAMIC_RESCISSION().evaluate(rule, make_action(jurisdiction_code="CA", is_declared_disaster=True))
    assert disaster.fired is False
    assert "7-day" in disaster.recommended_action
