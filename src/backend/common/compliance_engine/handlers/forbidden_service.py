from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import ServiceListThreshold


@register_handler
class FORBIDDEN_SERVICE(LogicHandler):
    """Services a licensed adjuster may not offer (e.g. legal advice, coverage opinions)."""

    logic_type = LogicType.FORBIDDEN_SERVICE
    threshold_model = ServiceListThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        forbidden = set(rule.parse_threshold(ServiceListThreshold).tags)
        requested = {s.strip().upper() for s in action.requested_services if s and s.strip()}
        offending = sorted(requested & forbidden)
        if not offending:
            return FiredResult(fired=False)

        default = f"Remove {', '.join(offending)} from the engagement; refer to a licensed attorney."
        return FiredResult(fired=True, recommended_action=self.recommended_action(rule, default))
