from __future__ import annotations

from pydantic import ValidationError


class ComplianceEngineError(RuntimeError):
    pass


class CatalogUnavailableError(ComplianceEngineError):
    def __init__(self, jurisdiction_code: str, message: str):
        super().__init__(f"Rule catalog unavailable for {jurisdiction_code}: {message}")
        self.jurisdiction_code = jurisdiction_code


class MalformedThresholdError(ComplianceEngineError):
    def __init__(self, rule_id: str, logic_type: str, cause: ValidationError | None = None):
        detail = f" ({cause.error_count()} error(s))" if cause is not None else ""
        super().__init__(f"Rule {rule_id}: threshold does not match {logic_type}{detail}")
        self.rule_id = rule_id
        self.logic_type = logic_type
        self.cause = cause
