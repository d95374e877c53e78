from decimal import Decimal

from common.compliance_engine.engine import REASONABLENESS_NOTE
from common.compliance_engine.models import ComplianceZone


def test_max_fee_default_green_fallback(fixture_engine):
    res = fixture_engine.max_fee("ZZ", 100000, False)
    assert res.max_percentage == Decimal("0.33")
    assert res.max_amount == Decimal("33000")
    assert res.notes == REASONABLENESS_NOTE
    assert res.is_statutory is False
    assert res.rule_id is None


def test_max_fee_configurable_ceiling(make_engine):
    res = make_engine(default_fee_ceiling=Decimal("0.25")).max_fee("ZZ", Decimal("1000"))
    assert res.max_amount == Decimal("250")


def test_max_fee_flat_cap(fixture_engine):
    res = fixture_engine.max_fee("TN", 50000)
    assert res.max_percentage == Decimal("0.1")
    assert res.max_amount == Decimal("5000")
    assert res.is_statutory is True
    assert res.rule_id == "tn-fee-cap"


def test_max_fee_dynamic_cap(fixture_engine):
    standard = fixture_engine.max_fee("FL", 100000)
    emergency = fixture_engine.max_fee("FL", 100000, is_emergency=True)
    assert standard.max_percentage == Decimal("0.2")
    assert emergency.max_percentage == Decimal("0.1")
    assert emergency.max_amount == Decimal("10000")


def test_max_fee_sliding_scale_blended_percentage(fixture_engine):
    res = fixture_engine.max_fee("DE", 100000)
    assert res.max_amount == Decimal("9625")
    assert res.max_percentage == Decimal("0.09625")
    assert res.notes.startswith("Sliding scale:")
    assert res.is_statutory is True


def test_max_fee_sliding_scale_zero_claim(fixture_engine):
    res = fixture_engine.max_fee("DE", 0)
    assert res.max_amount == Decimal("0")
    assert res.max_percentage == Decimal("0")


def test_max_fee_malformed_rule_falls_back_to_ceiling(make_rule, make_engine):
    rule = make_rule(logic_type="MAX_PERCENTAGE", threshold_value="not a number", rule_id="broken-cap")
    res = make_engine(rule).max_fee("FL", 1000)
    assert res.max_percentage == Decimal("0.33")
    assert res.is_statutory is False
    assert "broken-cap" in res.notes


def test_max_fee_ignores_inactive_rule(make_rule, make_engine):
    rule = make_rule(logic_type="MAX_PERCENTAGE", threshold_value="0.05", is_active=False)
    res = make_engine(rule).max_fee("FL", 1000)
    assert res.is_statutory is False


def test_is_allowed(fixture_engine):
    banned = fixture_engine.is_allowed("AL")
    assert banned.allowed is False
    assert banned.reason == "Public adjusting is illegal in Alabama."

    assert fixture_engine.is_allowed("KS").allowed is False
    assert fixture_engine.is_allowed("FL").allowed is True
    assert fixture_engine.is_allowed("FL").reason is None
    # Retired NY ban is inactive.
    assert fixture_engine.is_allowed("NY").allowed is True


def test_classify_zone(fixture_engine):
    assert fixture_engine.classify_zone("AL").zone == ComplianceZone.RED
    assert fixture_engine.classify_zone("AL").rule_ids == ["al-total-ban"]
    assert fixture_engine.classify_zone("KS").zone == ComplianceZone.ORANGE
    assert fixture_engine.classify_zone("LA").zone == ComplianceZone.ORANGE
    assert fixture_engine.classify_zone("TN").zone == ComplianceZone.YELLOW
    assert fixture_engine.classify_zone("ZZ").zone == ComplianceZone.GREEN
    assert fixture_engine.classify_zone("ZZ").rule_ids == []
