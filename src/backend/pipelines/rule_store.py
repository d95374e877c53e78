from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from adapters.rule_documents import rules_from_manifest
from common.compliance_engine.engine import RuleStore
from common.compliance_engine.errors import CatalogUnavailableError
from common.compliance_engine.models import DEFAULT_GREEN, EnforcementRule, RuleCategory, Severity


def _matches_one(
    rule: EnforcementRule,
    jurisdiction_code: str,
    category: RuleCategory,
    severity: Optional[Severity],
) -> bool:
    if not rule.is_active or rule.jurisdiction_code != jurisdiction_code:
        return False
    if rule.category is not category:
        return False
    return severity is None or rule.severity is severity


def _select_active(rules: Iterable[EnforcementRule], jurisdiction_code: str) -> list[EnforcementRule]:
    wanted = {jurisdiction_code.upper(), DEFAULT_GREEN}
    return [r for r in rules if r.is_active and r.jurisdiction_code in wanted]


@dataclass(frozen=True)
class InMemoryRuleStore:
    rules: tuple[EnforcementRule, ...] = field(default_factory=tuple)

    @classmethod
    def from_rules(cls, rules: Iterable[EnforcementRule]) -> "InMemoryRuleStore":
        return cls(rules=tuple(rules))

    def find_active_rules(self, jurisdiction_code: str) -> list[EnforcementRule]:
        return _select_active(self.rules, jurisdiction_code)

    def find_one(
        self,
        jurisdiction_code: str,
        category: RuleCategory,
        severity: Optional[Severity] = None,
    ) -> Optional[EnforcementRule]:
        code = jurisdiction_code.upper()
        return next((r for r in self.rules if _matches_one(r, code, category, severity)), None)


class FixturesRuleStore:
    """Rule catalog read from a JSON or YAML manifest file.

    The file is re-read on every query, so each engine call sees the catalog as it
    is on disk at that moment.
    """

    def __init__(self, path: Path, *, strict: bool = False) -> None:
        self._path = Path(path)
        self._strict = strict

    @property
    def path(self) -> Path:
        return self._path

    def find_active_rules(self, jurisdiction_code: str) -> list[EnforcementRule]:
        return _select_active(self._load(jurisdiction_code), jurisdiction_code)

    def find_one(
        self,
        jurisdiction_code: str,
        category: RuleCategory,
        severity: Optional[Severity] = None,
    ) -> Optional[EnforcementRule]:
        code = jurisdiction_code.upper()
        return next((r for r in self._load(code) if _matches_one(r, code, category, severity)), None)

    def _load(self, jurisdiction_code: str) -> list[EnforcementRule]:
        if not self._path.exists():
            raise CatalogUnavailableError(jurisdiction_code, f"rule manifest not found: {self._path}")
        try:
            manifest = _read_manifest(self._path)
            return rules_from_manifest(manifest, strict=self._strict)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise CatalogUnavailableError(jurisdiction_code, f"cannot load {self._path}: {exc}") from exc


def _read_manifest(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def get_rule_store(
    name: str,
    *,
    rules_path: Path | None = None,
    rules: Iterable[EnforcementRule] = (),
    strict: bool = False,
) -> RuleStore:
    """Resolve a rule store implementation by name (memory|fixtures)."""
    source = (name or "").strip().lower()
    if source == "memory":
        return InMemoryRuleStore.from_rules(rules)
    if source in ("fixtures", ""):
        return FixturesRuleStore(rules_path or default_rules_path(), strict=strict)
    raise ValueError(f"Unknown rule store '{name}' (expected 'memory' or 'fixtures').")


def default_rules_path() -> Path:
    return Path(__file__).resolve().parents[1] / "tests" / "compliance_engine" / "fixtures" / "rules.json"
