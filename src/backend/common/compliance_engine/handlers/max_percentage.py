from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import PercentageCapThreshold, format_percentage


@register_handler
class MAX_PERCENTAGE(LogicHandler):
    logic_type = LogicType.MAX_PERCENTAGE
    threshold_model = PercentageCapThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        cap = rule.parse_threshold(PercentageCapThreshold).cap
        if action.fee_percentage is None:
            return FiredResult(fired=False)

        # The cap itself is allowed.
        if action.fee_percentage <= cap:
            return FiredResult(fired=False)

        return FiredResult(
            fired=True,
            recommended_action=(
                f"Reduce fee to {format_percentage(cap)} or less to comply with {rule.jurisdiction_code} law."
            ),
        )
