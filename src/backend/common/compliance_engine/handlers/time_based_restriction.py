from __future__ import annotations

from ..handler import LogicHandler
from ..models import ActionType, ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import TimeBasedRestrictionThreshold


@register_handler
class TIME_BASED_RESTRICTION(LogicHandler):
    """No solicitation for a number of hours after a disaster declaration.

    Elapsed time since the declaration is tracked by the caller; any solicitation
    while the declared-disaster flag is set is treated as inside the window.
    """

    logic_type = LogicType.TIME_BASED_RESTRICTION
    threshold_model = TimeBasedRestrictionThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        restriction = rule.parse_threshold(TimeBasedRestrictionThreshold)
        if not action.is_declared_disaster or action.action_type != ActionType.SOLICITATION:
            return FiredResult(fired=False)

        return FiredResult(
            fired=True,
            recommended_action=(
                f"Wait {restriction.restriction_hours} hours after disaster declaration "
                f"before soliciting in {rule.jurisdiction_code}."
            ),
        )
