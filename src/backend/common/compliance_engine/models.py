from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T", bound=BaseModel)

DEFAULT_GREEN = "DEFAULT_GREEN"


class Severity(str, Enum):
    BLOCK_ACTION = "BLOCK_ACTION"
    WARN_BLOCK = "WARN_BLOCK"
    WARN_CONTINUE = "WARN_CONTINUE"
    INFO_ONLY = "INFO_ONLY"

    @property
    def is_violation(self) -> bool:
        return self in (Severity.BLOCK_ACTION, Severity.WARN_BLOCK)

    @property
    def is_blocking(self) -> bool:
        return self is Severity.BLOCK_ACTION


# Older catalog documents carry severities that predate the four-level scale.
LEGACY_SEVERITY_ALIASES: Dict[str, Severity] = {
    "WARNING_ONLY": Severity.WARN_CONTINUE,
}


class RuleCategory(str, Enum):
    LICENSE_RESTRICTION = "LICENSE_RESTRICTION"
    FEE_CAP = "FEE_CAP"
    FEE_STRUCTURE = "FEE_STRUCTURE"
    CATASTROPHE_RESTRICTION = "CATASTROPHE_RESTRICTION"
    CONTRACT_REQUIREMENT = "CONTRACT_REQUIREMENT"
    SCOPE_OF_PRACTICE = "SCOPE_OF_PRACTICE"
    UPL_PREVENTION = "UPL_PREVENTION"
    SOLICITATION = "SOLICITATION"
    RESCISSION = "RESCISSION"
    TIME_RESTRICTION = "TIME_RESTRICTION"


class LogicType(str, Enum):
    FORBIDDEN_KEYWORD = "FORBIDDEN_KEYWORD"
    FORBIDDEN_ACTION = "FORBIDDEN_ACTION"
    FORBIDDEN_FEE_TYPE = "FORBIDDEN_FEE_TYPE"
    FORBIDDEN_SERVICE = "FORBIDDEN_SERVICE"
    MAX_PERCENTAGE = "MAX_PERCENTAGE"
    DYNAMIC_CAP = "DYNAMIC_CAP"
    SLIDING_SCALE = "SLIDING_SCALE"
    TIME_WINDOW = "TIME_WINDOW"
    TIME_BASED_RESTRICTION = "TIME_BASED_RESTRICTION"
    EVENT_BASED_RESTRICTION = "EVENT_BASED_RESTRICTION"
    LANGUAGE_REQUIREMENT = "LANGUAGE_REQUIREMENT"
    REQUIRED_DISCLOSURE = "REQUIRED_DISCLOSURE"
    DYNAMIC_RESCISSION = "DYNAMIC_RESCISSION"

    @classmethod
    def parse(cls, value: str) -> Optional["LogicType"]:
        try:
            return cls(value)
        except ValueError:
            return None


class ClaimType(str, Enum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    PERSONAL_LINES = "PERSONAL_LINES"


class FeeType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    HOURLY = "HOURLY"
    FLAT_FEE = "FLAT_FEE"
    CONTINGENCY = "CONTINGENCY"


class ActionType(str, Enum):
    CONTRACT = "CONTRACT"
    SOLICITATION = "SOLICITATION"
    NEGOTIATION = "NEGOTIATION"
    REPRESENTATION = "REPRESENTATION"


class ConfidenceLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ComplianceZone(str, Enum):
    RED = "RED"
    ORANGE = "ORANGE"
    YELLOW = "YELLOW"
    GREEN = "GREEN"


class LegalBasis(BaseModel):
    statute: Optional[str] = None
    regulation: Optional[str] = None
    effective_date: Optional[date] = None
    url: Optional[str] = None
    notes: Optional[str] = None
    consequences: List[str] = Field(default_factory=list)


class EnforcementRule(BaseModel):
    """A single jurisdiction rule as supplied by the rule store.

    `logic_type` stays a plain string so catalog entries written for a newer engine
    still load; the evaluator treats tags it does not know as a no-op.
    `threshold_value` is the raw payload; handlers parse it with their threshold model.
    """

    rule_id: str
    jurisdiction_code: str
    jurisdiction_name: Optional[str] = None
    category: RuleCategory
    description: str = ""
    logic_type: str
    threshold_value: Any = None
    severity: Severity = Severity.WARN_CONTINUE
    error_message: str
    recommended_action: Optional[str] = None
    legal_basis: Optional[LegalBasis] = None
    is_active: bool = True

    allowed_types: List[str] = Field(default_factory=list)
    prohibited_types: List[str] = Field(default_factory=list)
    allowed_fee_types: List[str] = Field(default_factory=list)
    prohibited_fee_types: List[str] = Field(default_factory=list)
    applicable_to_all: bool = False
    no_exceptions: bool = False
    verified_date: Optional[date] = None
    confidence_level: ConfidenceLevel = ConfidenceLevel.MEDIUM

    @field_validator("jurisdiction_code", "logic_type", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _legacy_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LEGACY_SEVERITY_ALIASES.get(value.strip().upper(), value.strip().upper())
        return value

    @property
    def known_logic_type(self) -> Optional[LogicType]:
        return LogicType.parse(self.logic_type)

    def parse_threshold(self, model: Type[T]) -> T:
        return model.model_validate(self.threshold_value)


class ContractValidationInput(BaseModel):
    """Proposed action to check. Everything except the jurisdiction is optional."""

    jurisdiction_code: str
    claim_type: Optional[ClaimType] = None
    fee_type: Optional[FeeType] = None
    fee_percentage: Optional[Decimal] = None
    fee_amount: Optional[Decimal] = None
    claim_amount: Optional[Decimal] = None
    is_emergency: bool = False
    is_declared_disaster: bool = False
    contract_language: Optional[str] = None
    action_type: Optional[ActionType] = None
    solicitation_time: Optional[datetime] = None
    requested_services: List[str] = Field(default_factory=list)

    @field_validator("jurisdiction_code", "claim_type", "fee_type", "action_type", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class FiredResult(BaseModel):
    fired: bool = False
    recommended_action: Optional[str] = None


class ComplianceViolation(BaseModel):
    rule_id: str
    jurisdiction_code: str
    category: RuleCategory
    severity: Severity
    error_message: str
    legal_basis: Optional[LegalBasis] = None
    recommended_action: Optional[str] = None


class ComplianceWarning(BaseModel):
    rule_id: str
    jurisdiction_code: str
    category: RuleCategory
    message: str
    recommended_action: Optional[str] = None
    # Internal only; drives severity-first ordering without appearing in the payload.
    severity: Severity = Field(default=Severity.INFO_ONLY, exclude=True)


class ComplianceValidationResult(BaseModel):
    is_valid: bool
    violations: List[ComplianceViolation] = Field(default_factory=list)
    warnings: List[ComplianceWarning] = Field(default_factory=list)
    blocked_actions: List[RuleCategory] = Field(default_factory=list)

    def ordered_by_severity(self) -> "ComplianceValidationResult":
        ordering = SeverityOrdering.default()
        return self.model_copy(
            update={
                "violations": ordering.sort(self.violations),
                "warnings": ordering.sort(self.warnings),
            }
        )


class MaxFeeResult(BaseModel):
    max_percentage: Decimal
    max_amount: Decimal
    notes: Optional[str] = None
    is_statutory: bool = False
    rule_id: Optional[str] = None


class EligibilityResult(BaseModel):
    allowed: bool
    reason: Optional[str] = None


class ZoneClassification(BaseModel):
    jurisdiction_code: str
    zone: ComplianceZone
    rule_ids: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class SeverityOrdering:
    order: Dict[Severity, int]

    @classmethod
    def default(cls) -> "SeverityOrdering":
        # Higher wins.
        return cls(
            order={
                Severity.BLOCK_ACTION: 40,
                Severity.WARN_BLOCK: 30,
                Severity.WARN_CONTINUE: 20,
                Severity.INFO_ONLY: 10,
            }
        )

    def sort(self, items: List[Any]) -> List[Any]:
        # sorted() is stable, so catalog order is kept within a severity.
        return sorted(items, key=lambda item: -self.order.get(item.severity, 0))
