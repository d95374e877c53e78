from __future__ import annotations

from ..handler import LogicHandler
from ..models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from ..registry import register_handler
from ..thresholds import LanguageListThreshold

_REQUIRED_SUFFIX = "_required"


def _language_token(tag: str) -> str:
    token = tag.lower()
    if token.endswith(_REQUIRED_SUFFIX):
        token = token[: -len(_REQUIRED_SUFFIX)]
    return token


@register_handler
class LANGUAGE_REQUIREMENT(LogicHandler):
    logic_type = LogicType.LANGUAGE_REQUIREMENT
    threshold_model = LanguageListThreshold

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        required = rule.parse_threshold(LanguageListThreshold).tags
        listed = " and ".join(required)

        # Missing language is a failure here, unlike other optional inputs.
        if not action.contract_language:
            return FiredResult(
                fired=True,
                recommended_action=f"Contract must be provided in {listed} for {rule.jurisdiction_code}.",
            )

        language = action.contract_language.lower()
        if any(_language_token(tag) in language for tag in required):
            return FiredResult(fired=False)

        return FiredResult(
            fired=True,
            recommended_action=f"Provide contract in {listed} for {rule.jurisdiction_code}.",
        )
