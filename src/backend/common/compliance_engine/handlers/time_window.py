from __future__ import annotations

from ..handler import LogicHandler
from ..models import ActionType, ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import TimeWindowThreshold


@register_handler
class TIME_WINDOW(LogicHandler):
    logic_type = LogicType.TIME_WINDOW
    threshold_model = TimeWindowThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        window = rule.parse_threshold(TimeWindowThreshold)
        if action.action_type != ActionType.SOLICITATION or action.solicitation_time is None:
            return FiredResult(fired=False)

        # Hour is taken as given: the caller supplies the jurisdiction's local time.
        if window.allows_hour(action.solicitation_time.hour):
            return FiredResult(fired=False)

        return FiredResult(
            fired=True,
            recommended_action=(
                f"Solicitation is only permitted between {window.start} and {window.end} "
                f"in {rule.jurisdiction_code}."
            ),
        )
