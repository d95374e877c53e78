from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, RootModel, field_validator

from .models import ActionType, EnforcementRule


def _as_tag_list(value: Any) -> Any:
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple)):
        return [str(v).strip().upper() for v in value if v is not None and str(v).strip()]
    return value


class TagListThreshold(RootModel[List[str]]):
    @field_validator("root", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return _as_tag_list(value)

    @property
    def tags(self) -> List[str]:
        return list(self.root)


class KeywordListThreshold(TagListThreshold):
    pass


class FeeTypeListThreshold(TagListThreshold):
    pass


class ServiceListThreshold(TagListThreshold):
    pass


class LanguageListThreshold(TagListThreshold):
    @field_validator("root")
    @classmethod
    def _at_least_one(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one required language must be listed")
        return value


class PercentageCapThreshold(RootModel[Decimal]):
    @field_validator("root")
    @classmethod
    def _non_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("percentage cap must be non-negative")
        return value

    @property
    def cap(self) -> Decimal:
        return self.root


class DynamicCapThreshold(BaseModel):
    standard: Decimal = Field(ge=0)
    emergency: Decimal = Field(ge=0)

    def applicable_cap(self, is_emergency: bool) -> Decimal:
        return self.emergency if is_emergency else self.standard


class SlidingScaleThreshold(BaseModel):
    tier1_limit: Decimal = Field(ge=0, validation_alias=AliasChoices("tier1_limit", "tier1Limit"))
    tier1_percent: Decimal = Field(ge=0, validation_alias=AliasChoices("tier1_percent", "tier1Percent"))
    tier2_percent: Decimal = Field(ge=0, validation_alias=AliasChoices("tier2_percent", "tier2Percent"))

    def tier_amounts(self, claim_amount: Decimal) -> tuple[Decimal, Decimal]:
        tier1 = min(claim_amount, self.tier1_limit) * self.tier1_percent
        tier2 = max(Decimal("0"), claim_amount - self.tier1_limit) * self.tier2_percent
        return tier1, tier2

    def max_allowed_fee(self, claim_amount: Decimal) -> Decimal:
        tier1, tier2 = self.tier_amounts(claim_amount)
        return tier1 + tier2

    def describe(self) -> str:
        return (
            f"{_pct(self.tier1_percent)}% on first ${self.tier1_limit}, "
            f"{_pct(self.tier2_percent)}% on excess"
        )


def _parse_hour(value: str) -> int:
    head = value.strip().split(":", 1)[0]
    hour = int(head)
    if not 0 <= hour <= 24:
        raise ValueError(f"hour out of range: {value!r}")
    return hour


class TimeWindowThreshold(BaseModel):
    # "HH:MM" strings in the solicitation's local time.
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _hour_string(cls, value: str) -> str:
        _parse_hour(value)
        return value.strip()

    @property
    def start_hour(self) -> int:
        return _parse_hour(self.start)

    @property
    def end_hour(self) -> int:
        return _parse_hour(self.end)

    def allows_hour(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


class TimeBasedRestrictionThreshold(BaseModel):
    restriction_hours: int = Field(ge=0, validation_alias=AliasChoices("restriction_hours", "restrictionHours"))
    trigger_event: str = Field(default="", validation_alias=AliasChoices("trigger_event", "triggerEvent"))


class EventBasedRestrictionThreshold(BaseModel):
    trigger_event: str = Field(default="", validation_alias=AliasChoices("trigger_event", "triggerEvent"))
    restricted_actions: List[ActionType] = Field(
        default_factory=lambda: [ActionType.SOLICITATION],
        validation_alias=AliasChoices("restricted_actions", "restrictedActions"),
    )
    restriction_hours: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("restriction_hours", "restrictionHours")
    )

    @field_validator("restricted_actions", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return _as_tag_list(value)


class DisclosureThreshold(RootModel[str]):
    @field_validator("root", mode="before")
    @classmethod
    def _join_lines(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return "; ".join(str(v) for v in value)
        return value

    @property
    def text(self) -> str:
        return self.root


class DynamicRescissionThreshold(BaseModel):
    # Day counts.
    standard: int = Field(ge=0)
    emergency: int = Field(ge=0)

    def applicable_period(self, is_declared_disaster: bool) -> int:
        return self.emergency if is_declared_disaster else self.standard


class FreeformThreshold(RootModel[Any]):
    """Payload the handler does not read."""


def _pct(value: Decimal) -> str:
    return f"{(value * 100).normalize():f}"


def format_percentage(value: Decimal) -> str:
    return f"{value * 100:.1f}%"


def validate_rule_threshold(rule: EnforcementRule) -> Optional[BaseModel]:
    """Parse a rule's payload against its logic type's threshold model.

    Returns None for logic types this engine does not know. Raises pydantic's
    ValidationError when the payload does not fit.
    """
    from .registry import registry

    handler_cls = registry.lookup(rule.logic_type)
    if handler_cls is None:
        return None
    return rule.parse_threshold(handler_cls.threshold_model)
