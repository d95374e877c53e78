from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import SlidingScaleThreshold


@register_handler
class SLIDING_SCALE(LogicHandler):
    """Tiered fee ceiling: one rate up to the tier-1 limit, another on the excess."""

    logic_type = LogicType.SLIDING_SCALE
    threshold_model = SlidingScaleThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        scale = rule.parse_threshold(SlidingScaleThreshold)
        if action.fee_amount is None or action.claim_amount is None:
            return FiredResult(fired=False)

        max_allowed = scale.max_allowed_fee(action.claim_amount)
        if action.fee_amount <= max_allowed:
            return FiredResult(fired=False)

        return FiredResult(
            fired=True,
            recommended_action=f"Maximum fee allowed: ${max_allowed:,.2f} ({scale.describe()}).",
        )
