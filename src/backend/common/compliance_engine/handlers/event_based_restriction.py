from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import EventBasedRestrictionThreshold


@register_handler
class EVENT_BASED_RESTRICTION(LogicHandler):
    logic_type = LogicType.EVENT_BASED_RESTRICTION
    threshold_model = EventBasedRestrictionThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        restriction = rule.parse_threshold(EventBasedRestrictionThreshold)
        if not action.is_declared_disaster or action.action_type is None:
            return FiredResult(fired=False)
        if action.action_type not in restriction.restricted_actions:
            return FiredResult(fired=False)

        event = restriction.trigger_event or "declared disaster"
        if restriction.restriction_hours is not None:
            default = (
                f"{action.action_type.value.title()} is suspended for {restriction.restriction_hours} hours "
                f"after a {event} in {rule.jurisdiction_code}."
            )
        else:
            default = f"{action.action_type.value.title()} is suspended during a {event} in {rule.jurisdiction_code}."
        return FiredResult(fired=True, recommended_action=self.recommended_action(rule, default))
