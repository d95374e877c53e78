import pytest

from adapters.rule_documents import rules_from_manifest
from common.compliance_engine.engine import ComplianceEngine
from common.compliance_engine.models import ContractValidationInput, EnforcementRule
from pipelines.rule_store import InMemoryRuleStore


@pytest.fixture
def fixture_rules(rules_manifest) -> list[EnforcementRule]:
    return rules_from_manifest(rules_manifest)


@pytest.fixture
def fixture_engine(fixture_rules) -> ComplianceEngine:
    return ComplianceEngine(InMemoryRuleStore.from_rules(fixture_rules))


@pytest.fixture
def make_rule():
    counter = {"n": 0}

    def _make(
        *,
        logic_type: str,
        threshold_value=None,
        jurisdiction_code: str = "FL",
        category: str = "FEE_CAP",
        severity: str = "BLOCK_ACTION",
        error_message: str = "Rule fired.",
        **extra,
    ) -> EnforcementRule:
        counter["n"] += 1
        return EnforcementRule(
            rule_id=extra.pop("rule_id", f"rule-{counter['n']}"),
            jurisdiction_code=jurisdiction_code,
            category=category,
            logic_type=logic_type,
            threshold_value=threshold_value,
            severity=severity,
            error_message=error_message,
            **extra,
        )

    return _make


@pytest.fixture
def make_action():
    def _make(*, jurisdiction_code: str = "FL", **fields) -> ContractValidationInput:
        return ContractValidationInput(jurisdiction_code=jurisdiction_code, **fields)

    return _make


@pytest.fixture
def make_engine():
    def _make(*rules: EnforcementRule, **kwargs) -> ComplianceEngine:
        return ComplianceEngine(InMemoryRuleStore.from_rules(rules), **kwargs)

    return _make
