from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import DynamicCapThreshold, format_percentage


@register_handler
class DYNAMIC_CAP(LogicHandler):
    """Fee cap that tightens during an emergency or declared disaster."""

    logic_type = LogicType.DYNAMIC_CAP
    threshold_model = DynamicCapThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        caps = rule.parse_threshold(DynamicCapThreshold)
        if action.fee_percentage is None:
            return FiredResult(fired=False)

        emergency = action.is_emergency or action.is_declared_disaster
        cap = caps.applicable_cap(emergency)
        if action.fee_percentage <= cap:
            return FiredResult(fired=False)

        which = "emergency" if emergency else "standard"
        return FiredResult(
            fired=True,
            recommended_action=f"Reduce fee to {format_percentage(cap)} ({which} cap for {rule.jurisdiction_code}).",
        )
