from datetime import datetime

from common.compliance_engine.handlers.event_based_restriction import EVENT_BASED_RESTRICTION
from common.compliance_engine.handlers.time_based_restriction import TIME_BASED_RESTRICTION
from common.compliance_engine.handlers.time_window import TIME_WINDOW


def _window_rule(make_rule):
    return make_rule(
        logic_type="TIME_WINDOW",
        threshold_value={"start": "08:00", "end": "20:00"},
        category="SOLICITATION",
    )


def test_time_window_hours_are_half_open(make_rule, make_action):
    rule = _window_rule(make_rule)
    handler = TIME_WINDOW()

    def at(hour, minute=0):
        return make_action(action_type="SOLICITATION", solicitation_time=datetime(2025, 6, 2, hour, minute))

    assert handler.evaluate(rule, at(8)).fired is False
    assert handler.evaluate(rule, at(19, 59)).fired is False
    assert handler.evaluate(rule, at(20)).fired is True
    assert handler.evaluate(rule, at(7, 59)).fired is True
    assert "08:00 and 20:00" in handler.evaluate(rule, at(21)).recommended_action


def test_time_window_ignores_non_solicitation_and_missing_time(make_rule, make_action):
    rule = _window_rule(make_rule)
    late = datetime(2025, 6, 2, 23, 0)
    assert TIME_WINDOW().evaluate(rule, make_action(action_type="CONTRACT", solicitation_time=late)).fired is False
    assert TIME_WINDOW().evaluate(rule, make_action(action_type="SOLICITATION")).fired is False


def test_time_based_restriction_fires_for_solicitation_during_disaster(make_rule, make_action):
    rule = make_rule(
        logic_type="TIME_BASED_RESTRICTION",
        threshold_value={"restrictionHours": 72, "triggerEvent": "DISASTER_DECLARATION"},
        jurisdiction_code="TX",
        category="CATASTROPHE_RESTRICTION",
    )
    res = TIME_BASED_RESTRICTION().evaluate(
        rule, make_action(jurisdiction_code="TX", action_type="SOLICITATION", is_declared_disaster=True)
    )
    assert res.fired is True
    assert "72 hours" in res.recommended_action

    no_disaster = make_action(jurisdiction_code="TX", action_type="SOLICITATION")
    assert TIME_BASED_RESTRICTION().evaluate(rule, no_disaster).fired is False
    contract = make_action(jurisdiction_code="TX", action_type="CONTRACT", is_declared_disaster=True)
    assert TIME_BASED_RESTRICTION().evaluate(rule, contract).fired is False


def test_event_based_restriction_respects_restricted_actions(make_rule, make_action):
    rule = make_rule(
        logic_type="EVENT_BASED_RESTRICTION",
        threshold_value={"triggerEvent": "HURRICANE", "restrictionHours": 48, "restrictedActions": ["SOLICITATION", "CONTRACT"]},
        jurisdiction_code="NC",
    )
    handler = EVENT_BASED_RESTRICTION()

    res = handler.evaluate(rule, make_action(action_type="CONTRACT", is_declared_disaster=True))
    assert res.fired is True
    assert "48 hours" in res.recommended_action
    assert "HURRICANE" in res.recommended_action

    assert handler.evaluate(rule, make_action(action_type="NEGOTIATION", is_declared_disaster=True)).fired is False
    assert handler.evaluate(rule, make_action(action_type="CONTRACT")).fired is False
    assert handler.evaluate(rule, make_action(is_declared_disaster=True)).fired is False


def test_event_based_restriction_defaults_to_solicitation(make_rule, make_action):
    rule = make_rule(logic_type="EVENT_BASED_RESTRICTION", threshold_value={"triggerEvent": "WILDFIRE"})
    handler = EVENT_BASED_RESTRICTION()
    assert handler.evaluate(rule, make_action(action_type="SOLICITATION", is_declared_disaster=True)).fired is True
    assert handler.evaluate(rule, make_action(action_type="CONTRACT", is_declared_disaster=True)).fired is False
