from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import FreeformThreshold


@register_handler
class FORBIDDEN_ACTION(LogicHandler):
    """Total ban: fires for every action, whatever the input carries."""

    logic_type = LogicType.FORBIDDEN_ACTION
    threshold_model = FreeformThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        default = (
            f"Refer client to licensed attorney in {rule.jurisdiction_code}. "
            "Public adjusting is illegal in this state."
        )
        return FiredResult(fired=True, recommended_action=self.recommended_action(rule, default))
