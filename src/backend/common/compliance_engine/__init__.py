"""Jurisdiction compliance engine for public-adjusting actions.

Only rule evaluation lives here:
- Inputs are rule records from an injected store plus one proposed action.
- No database, HTTP, or file access happens inside the engine.
"""

from .engine import ComplianceEngine, RuleStore
from .errors import CatalogUnavailableError, ComplianceEngineError, MalformedThresholdError
from .evaluator import RuleEvaluator
from .models import (
    DEFAULT_GREEN,
    ActionType,
    ClaimType,
    ComplianceValidationResult,
    ComplianceViolation,
    ComplianceWarning,
    ComplianceZone,
    ContractValidationInput,
    EligibilityResult,
    EnforcementRule,
    FeeType,
    FiredResult,
    LogicType,
    MaxFeeResult,
    RuleCategory,
    Severity,
    ZoneClassification,
)

# Import built-in handlers so they self-register with the global registry.
from . import handlers as _builtin_handlers  # noqa: F401
