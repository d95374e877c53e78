from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import DynamicRescissionThreshold


@register_handler
class DYNAMIC_RESCISSION(LogicHandler):
    logic_type = LogicType.DYNAMIC_RESCISSION
    threshold_model = DynamicRescissionThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        periods = rule.parse_threshold(DynamicRescissionThreshold)
        days = periods.applicable_period(action.is_declared_disaster)
        return FiredResult(
            fired=False,
            recommended_action=f"Include {days}-day cancellation period in contract for {rule.jurisdiction_code}.",
        )
