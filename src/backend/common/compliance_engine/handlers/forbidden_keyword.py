from __future__ import annotations

from typing import Dict, FrozenSet

from ..handler import LogicHandler
from ..models import ActionType, ClaimType, ContractValidationInput, EnforcementRule, FeeType, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import KeywordListThreshold

_RESIDENTIAL_CLAIMS = frozenset({ClaimType.RESIDENTIAL.value, ClaimType.PERSONAL_LINES.value})
_PERCENTAGE_FEES = frozenset({FeeType.PERCENTAGE.value, FeeType.CONTINGENCY.value})

# Keyword tag -> input values it stands for, checked against claim type and fee type.
KEYWORD_GROUPS: Dict[str, FrozenSet[str]] = {
    "RESIDENTIAL": _RESIDENTIAL_CLAIMS,
    "HOMEOWNER": _RESIDENTIAL_CLAIMS,
    "PERSONAL_LINES": _RESIDENTIAL_CLAIMS,
    "PERCENTAGE": _PERCENTAGE_FEES,
    "CONTINGENCY": _PERCENTAGE_FEES,
}

_ACTION_KEYWORDS = frozenset(a.value for a in ActionType)


def keyword_matches(keyword: str, action: ContractValidationInput) -> bool:
    action_type = action.action_type.value if action.action_type else None
    claim_type = action.claim_type.value if action.claim_type else None
    fee_type = action.fee_type.value if action.fee_type else None

    if keyword in _ACTION_KEYWORDS:
        return action_type == keyword
    group = KEYWORD_GROUPS.get(keyword)
    if group is not None:
        return claim_type in group or fee_type in group
    return keyword in {v for v in (claim_type, fee_type) if v}


@register_handler
class FORBIDDEN_KEYWORD(LogicHandler):
    logic_type = LogicType.FORBIDDEN_KEYWORD
    threshold_model = KeywordListThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        keywords = rule.parse_threshold(KeywordListThreshold).tags
        fired = any(keyword_matches(k, action) for k in keywords)
        return FiredResult(fired=fired, recommended_action=self.recommended_action(rule))
