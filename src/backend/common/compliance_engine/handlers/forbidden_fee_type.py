from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FeeType, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import FeeTypeListThreshold


@register_handler
class FORBIDDEN_FEE_TYPE(LogicHandler):
    logic_type = LogicType.FORBIDDEN_FEE_TYPE
    threshold_model = FeeTypeListThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        forbidden = rule.parse_threshold(FeeTypeListThreshold).tags
        if action.fee_type is None:
            return FiredResult(fired=False)

        if action.fee_type.value not in forbidden:
            return FiredResult(fired=False)

        allowed = [f.value for f in FeeType if f.value not in forbidden]
        default = f"Use {' or '.join(allowed)} billing structure only." if allowed else None
        return FiredResult(fired=True, recommended_action=rule.recommended_action or default)
