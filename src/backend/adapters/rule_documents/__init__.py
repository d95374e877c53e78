"""Rule-store document adapters (no I/O)."""

from .documents import rule_from_document, rule_to_document, rules_from_manifest

__all__ = [
    "rule_from_document",
    "rule_to_document",
    "rules_from_manifest",
]
