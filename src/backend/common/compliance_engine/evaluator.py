from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import ValidationError

from .errors import MalformedThresholdError
from .handler import LogicHandler
from .models import ContractValidationInput, EnforcementRule, FiredResult, LogicType
from .registry import registry

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """Dispatches a rule to the handler for its logic type.

    Unknown logic types and malformed threshold payloads never fire, so one bad
    catalog entry cannot stop the rest of a jurisdiction from being evaluated.
    """

    def __init__(self, handlers: Optional[Dict[LogicType, LogicHandler]] = None):
        self._handlers = dict(handlers) if handlers is not None else registry.create_all()

    def handler_for(self, logic_type: str) -> Optional[LogicHandler]:
        known = LogicType.parse(logic_type)
        if known is None:
            return None
        return self._handlers.get(known)

    def evaluate(self, rule: EnforcementRule, action: ContractValidationInput) -> FiredResult:
        handler = self.handler_for(rule.logic_type)
        if handler is None:
            logger.debug("Rule %s has unsupported logic type %s; skipping", rule.rule_id, rule.logic_type)
            return FiredResult(fired=False)

        try:
            return handler.evaluate(rule, action)
        except ValidationError as exc:
            err = MalformedThresholdError(rule.rule_id, rule.logic_type, exc)
            logger.warning("%s; treating rule as not fired", err)
            return FiredResult(fired=False)
        except MalformedThresholdError as exc:
            logger.warning("%s; treating rule as not fired", exc)
            return FiredResult(fired=False)
