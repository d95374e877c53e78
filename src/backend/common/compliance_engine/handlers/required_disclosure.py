from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import DisclosureThreshold


@register_handler
class REQUIRED_DISCLOSURE(LogicHandler):
    """Reminder only: disclosure content cannot be verified from the action input."""

    logic_type = LogicType.REQUIRED_DISCLOSURE
    threshold_model = DisclosureThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        disclosure = rule.parse_threshold(DisclosureThreshold).text
        return FiredResult(fired=False, recommended_action=f"Ensure contract includes: {disclosure}")
