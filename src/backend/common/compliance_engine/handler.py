from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Type

from pydantic import BaseModel

from .models import ContractValidationInput, EnforcementRule, FiredResult, LogicType

GENERIC_RECOMMENDED_ACTION = "Contact state Department of Insurance for guidance."


class LogicHandler(ABC):
    logic_type: LogicType
    threshold_model: Type[BaseModel]

    def __init__(self):
        if not getattr(self, "logic_type", None):
            raise ValueError("LogicHandler must define logic_type")

    @abstractmethod
    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:  # pragma: no cover
        raise NotImplementedError

    def recommended_action(self, rule: EnforcementRule, default: str = GENERIC_RECOMMENDED_ACTION) -> str:
        return rule.recommended_action or default
