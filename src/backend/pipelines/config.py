from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

from common.compliance_engine.engine import DEFAULT_FEE_CEILING, ComplianceEngine

from .rule_store import default_rules_path, get_rule_store


load_dotenv()

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class EngineConfig:
    rule_store: str
    rules_path: Path
    default_fee_ceiling: Decimal
    strict_thresholds: bool


def get_engine_config() -> EngineConfig:
    """
    Load compliance engine configuration from environment variables.

    Reads:
      COMPLIANCE_RULE_STORE (memory|fixtures), COMPLIANCE_RULES_PATH,
      COMPLIANCE_DEFAULT_FEE_CEILING, COMPLIANCE_STRICT_THRESHOLDS
    """
    rule_store = os.getenv("COMPLIANCE_RULE_STORE", "fixtures").strip().lower()
    if rule_store not in ("memory", "fixtures"):
        raise ValueError("COMPLIANCE_RULE_STORE must be 'memory' or 'fixtures'.")

    rules_path_raw = os.getenv("COMPLIANCE_RULES_PATH", "").strip()
    rules_path = Path(rules_path_raw) if rules_path_raw else default_rules_path()

    return EngineConfig(
        rule_store=rule_store,
        rules_path=rules_path,
        default_fee_ceiling=_fee_ceiling_from_env("COMPLIANCE_DEFAULT_FEE_CEILING"),
        strict_thresholds=_bool_from_env("COMPLIANCE_STRICT_THRESHOLDS"),
    )


def build_engine(config: EngineConfig | None = None, **store_kwargs) -> ComplianceEngine:
    config = config or get_engine_config()
    store = get_rule_store(
        config.rule_store,
        rules_path=config.rules_path,
        strict=config.strict_thresholds,
        **store_kwargs,
    )
    return ComplianceEngine(store, default_fee_ceiling=config.default_fee_ceiling)


def _fee_ceiling_from_env(name: str) -> Decimal:
    raw = os.getenv(name, "").strip()
    if not raw:
        return DEFAULT_FEE_CEILING
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a decimal fraction (e.g. 0.33), got {raw!r}") from exc
    if not Decimal("0") < value <= Decimal("1"):
        raise ValueError(f"{name} must be in (0, 1], got {raw!r}")
    return value


def _bool_from_env(name: str) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
