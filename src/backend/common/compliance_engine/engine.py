from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, List, Optional, Protocol, TypeVar

from pydantic import ValidationError

from .errors import CatalogUnavailableError
from .evaluator import RuleEvaluator
from .models import (
    ComplianceValidationResult,
    ComplianceViolation,
    ComplianceWarning,
    ComplianceZone,
    ContractValidationInput,
    EligibilityResult,
    EnforcementRule,
    LogicType,
    MaxFeeResult,
    RuleCategory,
    Severity,
    ZoneClassification,
)
from .thresholds import DynamicCapThreshold, PercentageCapThreshold, SlidingScaleThreshold

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_FEE_CEILING = Decimal("0.33")
REASONABLENESS_NOTE = "Standard reasonableness cap (no statutory limit)"

_PARTIAL_BAN_LOGIC = {
    LogicType.FORBIDDEN_KEYWORD,
    LogicType.FORBIDDEN_FEE_TYPE,
    LogicType.FORBIDDEN_SERVICE,
}


class RuleStore(Protocol):
    """Read-only view of the rule catalog. Implementations live with the store, not here."""

    def find_active_rules(self, jurisdiction_code: str) -> List[EnforcementRule]:
        ...

    def find_one(
        self,
        jurisdiction_code: str,
        category: RuleCategory,
        severity: Optional[Severity] = None,
    ) -> Optional[EnforcementRule]:
        ...


def _normalize_code(jurisdiction_code: str) -> str:
    return (jurisdiction_code or "").strip().upper()


class ComplianceEngine:
    def __init__(
        self,
        store: RuleStore,
        *,
        evaluator: Optional[RuleEvaluator] = None,
        default_fee_ceiling: Decimal = DEFAULT_FEE_CEILING,
    ):
        self._store = store
        self._evaluator = evaluator or RuleEvaluator()
        self._default_fee_ceiling = default_fee_ceiling

    def validate(self, jurisdiction_code: str, action: ContractValidationInput) -> ComplianceValidationResult:
        code = _normalize_code(jurisdiction_code)
        rules = self._fetch(code, lambda: self._store.find_active_rules(code))
        if rules is None:
            raise CatalogUnavailableError(code, "rule store returned no rule list")

        violations: list[ComplianceViolation] = []
        warnings: list[ComplianceWarning] = []
        blocked_actions: list[RuleCategory] = []

        for rule in rules:
            if not rule.is_active:
                continue
            result = self._evaluator.evaluate(rule, action)
            if not result.fired:
                continue

            if rule.severity.is_violation:
                violations.append(
                    ComplianceViolation(
                        rule_id=rule.rule_id,
                        jurisdiction_code=rule.jurisdiction_code,
                        category=rule.category,
                        severity=rule.severity,
                        error_message=rule.error_message,
                        legal_basis=rule.legal_basis,
                        recommended_action=result.recommended_action,
                    )
                )
                if rule.severity.is_blocking:
                    blocked_actions.append(rule.category)
            else:
                warnings.append(
                    ComplianceWarning(
                        rule_id=rule.rule_id,
                        jurisdiction_code=rule.jurisdiction_code,
                        category=rule.category,
                        message=rule.error_message,
                        recommended_action=result.recommended_action,
                        severity=rule.severity,
                    )
                )

        logger.debug(
            "Validated %s against %d rule(s): %d violation(s), %d warning(s)",
            code,
            len(rules),
            len(violations),
            len(warnings),
        )
        return ComplianceValidationResult(
            is_valid=not violations,
            violations=violations,
            warnings=warnings,
            blocked_actions=blocked_actions,
        )

    def validate_contract(self, action: ContractValidationInput) -> ComplianceValidationResult:
        return self.validate(action.jurisdiction_code, action)

    def is_allowed(self, jurisdiction_code: str) -> EligibilityResult:
        code = _normalize_code(jurisdiction_code)
        blocking = self._fetch(
            code,
            lambda: self._store.find_one(code, RuleCategory.LICENSE_RESTRICTION, Severity.BLOCK_ACTION),
        )
        if blocking is not None and blocking.is_active:
            return EligibilityResult(allowed=False, reason=blocking.error_message)
        return EligibilityResult(allowed=True)

    def max_fee(
        self,
        jurisdiction_code: str,
        claim_amount: Decimal,
        is_emergency: bool = False,
    ) -> MaxFeeResult:
        code = _normalize_code(jurisdiction_code)
        claim_amount = Decimal(str(claim_amount))
        rule = self._fetch(code, lambda: self._store.find_one(code, RuleCategory.FEE_CAP))
        if rule is None or not rule.is_active:
            return self._reasonableness_ceiling(claim_amount, REASONABLENESS_NOTE)

        try:
            return self._fee_cap_from_rule(rule, claim_amount, is_emergency)
        except ValidationError as exc:
            logger.warning(
                "Fee cap rule %s has a malformed %s threshold (%d error(s)); using reasonableness ceiling",
                rule.rule_id,
                rule.logic_type,
                exc.error_count(),
            )
            return self._reasonableness_ceiling(
                claim_amount,
                f"{REASONABLENESS_NOTE}; fee cap rule {rule.rule_id} could not be interpreted",
            )

    def classify_zone(self, jurisdiction_code: str) -> ZoneClassification:
        code = _normalize_code(jurisdiction_code)
        rules = self._fetch(code, lambda: self._store.find_active_rules(code))
        if rules is None:
            raise CatalogUnavailableError(code, "rule store returned no rule list")
        local = [r for r in rules if r.is_active and r.jurisdiction_code == code]

        blocking = [r for r in local if r.severity is Severity.BLOCK_ACTION]
        total_bans = [r for r in blocking if r.known_logic_type is LogicType.FORBIDDEN_ACTION]
        partial_bans = [r for r in blocking if r.known_logic_type in _PARTIAL_BAN_LOGIC]
        fee_caps = [r for r in local if r.category is RuleCategory.FEE_CAP]

        if total_bans:
            zone, matched = ComplianceZone.RED, total_bans
        elif partial_bans:
            zone, matched = ComplianceZone.ORANGE, partial_bans
        elif fee_caps:
            zone, matched = ComplianceZone.YELLOW, fee_caps
        else:
            zone, matched = ComplianceZone.GREEN, []
        return ZoneClassification(jurisdiction_code=code, zone=zone, rule_ids=[r.rule_id for r in matched])

    def _fetch(self, code: str, query: Callable[[], T]) -> T:
        # One store round trip per call; every rule in a verdict comes from the same snapshot.
        try:
            return query()
        except CatalogUnavailableError:
            raise
        except Exception as exc:
            logger.error("Rule store query failed for %s: %s", code, exc)
            raise CatalogUnavailableError(code, str(exc) or type(exc).__name__) from exc

    def _reasonableness_ceiling(self, claim_amount: Decimal, notes: str) -> MaxFeeResult:
        return MaxFeeResult(
            max_percentage=self._default_fee_ceiling,
            max_amount=claim_amount * self._default_fee_ceiling,
            notes=notes,
            is_statutory=False,
        )

    def _fee_cap_from_rule(self, rule: EnforcementRule, claim_amount: Decimal, is_emergency: bool) -> MaxFeeResult:
        logic_type = rule.known_logic_type

        if logic_type is LogicType.MAX_PERCENTAGE:
            pct = rule.parse_threshold(PercentageCapThreshold).cap
        elif logic_type is LogicType.DYNAMIC_CAP:
            pct = rule.parse_threshold(DynamicCapThreshold).applicable_cap(is_emergency)
        elif logic_type is LogicType.SLIDING_SCALE:
            scale = rule.parse_threshold(SlidingScaleThreshold)
            max_amount = scale.max_allowed_fee(claim_amount)
            blended = max_amount / claim_amount if claim_amount > 0 else Decimal("0")
            return MaxFeeResult(
                max_percentage=blended,
                max_amount=max_amount,
                notes=f"Sliding scale: {scale.describe()}",
                is_statutory=True,
                rule_id=rule.rule_id,
            )
        else:
            logger.warning(
                "Fee cap rule %s uses %s, which carries no cap; using reasonableness ceiling",
                rule.rule_id,
                rule.logic_type,
            )
            return self._reasonableness_ceiling(claim_amount, rule.description or REASONABLENESS_NOTE)

        return MaxFeeResult(
            max_percentage=pct,
            max_amount=claim_amount * pct,
            notes=rule.description or None,
            is_statutory=True,
            rule_id=rule.rule_id,
        )
