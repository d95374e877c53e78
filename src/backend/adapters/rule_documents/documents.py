from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from pydantic import ValidationError

from common.compliance_engine.models import EnforcementRule, LegalBasis
from common.compliance_engine.thresholds import validate_rule_threshold

# Store document key -> EnforcementRule field.
_FIELD_MAP = {
    "stateCode": "jurisdiction_code",
    "stateName": "jurisdiction_name",
    "category": "category",
    "description": "description",
    "logicType": "logic_type",
    "thresholdValue": "threshold_value",
    "severity": "severity",
    "errorMessage": "error_message",
    "recommendedAction": "recommended_action",
    "isActive": "is_active",
    "allowedTypes": "allowed_types",
    "prohibitedTypes": "prohibited_types",
    "allowedFeeTypes": "allowed_fee_types",
    "prohibitedFeeTypes": "prohibited_fee_types",
    "applicableToAll": "applicable_to_all",
    "noExceptions": "no_exceptions",
    "confidenceLevel": "confidence_level",
}

_LEGAL_BASIS_MAP = {
    "statute": "statute",
    "regulation": "regulation",
    "url": "url",
    "notes": "notes",
    "consequences": "consequences",
}


def rule_from_document(document: dict[str, Any]) -> EnforcementRule:
    """
    Build an EnforcementRule from a rule-store document.

    Expected shape (camelCase, as persisted):
      {
        "_id": "...",
        "stateCode": "FL",
        "category": "FEE_CAP",
        "logicType": "DYNAMIC_CAP",
        "thresholdValue": {"standard": 0.20, "emergency": 0.10},
        "severity": "BLOCK_ACTION",
        "errorMessage": "...",
        "legalBasis": {"statute": "...", "effectiveDate": "YYYY-MM-DD", ...},
        "isActive": true
      }

    Notes:
    - `_id` (or `id`/`ruleId`) is required and stringified
    - snake_case keys are accepted too, so engine dumps load back unchanged
    - thresholdValue is kept as-is; handlers validate it when they evaluate
    """
    if not isinstance(document, dict):
        raise ValueError("Rule documents must be objects.")

    rule_id = _first(document, "_id", "id", "ruleId", "rule_id")
    if rule_id in (None, ""):
        raise ValueError("Rule document missing required field: _id")

    data: dict[str, Any] = {"rule_id": str(rule_id)}
    for key, field_name in _FIELD_MAP.items():
        if key in document:
            data[field_name] = document[key]
        elif field_name in document:
            data[field_name] = document[field_name]

    verified = _first(document, "verifiedDate", "verified_date")
    if verified is not None:
        data["verified_date"] = _parse_date(verified)

    legal_raw = _first(document, "legalBasis", "legal_basis")
    if legal_raw:
        data["legal_basis"] = _legal_basis_from_document(legal_raw)

    return EnforcementRule.model_validate(data)


def rule_to_document(rule: EnforcementRule) -> dict[str, Any]:
    document: dict[str, Any] = {"_id": rule.rule_id}
    dumped = rule.model_dump(mode="json")
    for key, field_name in _FIELD_MAP.items():
        if key == "thresholdValue":
            # Keep the payload object untouched; no re-encoding of numbers.
            document[key] = rule.threshold_value
        elif dumped.get(field_name) is not None:
            document[key] = dumped[field_name]

    if rule.verified_date is not None:
        document["verifiedDate"] = rule.verified_date.isoformat()
    if rule.legal_basis is not None:
        legal = {k: dumped["legal_basis"][v] for k, v in _LEGAL_BASIS_MAP.items() if dumped["legal_basis"][v]}
        if rule.legal_basis.effective_date is not None:
            legal["effectiveDate"] = rule.legal_basis.effective_date.isoformat()
        document["legalBasis"] = legal
    return document


def rules_from_manifest(manifest: Any, *, strict: bool = False) -> list[EnforcementRule]:
    """
    Build rules from a manifest: either {"rules": [...]} or a bare list of documents.

    With strict=True every rule of a known logic type must carry a threshold that
    fits that logic type; a mismatch raises ValueError naming the rule.
    """
    rules: list[EnforcementRule] = []
    for entry in _select_documents(manifest):
        rule = rule_from_document(entry)
        if strict:
            try:
                validate_rule_threshold(rule)
            except ValidationError as exc:
                raise ValueError(
                    f"Rule {rule.rule_id} has a malformed {rule.logic_type} threshold: {exc.error_count()} error(s)"
                ) from exc
        rules.append(rule)
    return rules


def _select_documents(manifest: Any) -> Iterable[dict[str, Any]]:
    if isinstance(manifest, list):
        return manifest
    if isinstance(manifest, dict):
        documents = manifest.get("rules")
        if not isinstance(documents, list):
            raise ValueError("Rule manifest object must carry a 'rules' list.")
        return documents
    raise ValueError("Rule manifest must be a list or an object with a 'rules' list.")


def _legal_basis_from_document(raw: dict[str, Any]) -> LegalBasis:
    if not isinstance(raw, dict):
        raise ValueError("legalBasis must be an object.")
    data = {v: raw[k] for k, v in _LEGAL_BASIS_MAP.items() if raw.get(k) is not None}
    effective = _first(raw, "effectiveDate", "effective_date")
    if effective is not None:
        data["effective_date"] = _parse_date(effective)
    return LegalBasis.model_validate(data)


def _first(document: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in document and document[key] is not None:
            return document[key]
    return None


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    # Store exports use full ISO timestamps ("2024-01-01T00:00:00.000Z").
    return date.fromisoformat(text[:10])
