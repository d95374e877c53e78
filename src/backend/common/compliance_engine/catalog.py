from __future__ import annotations

import json
from typing import Any, Dict, List

from pydantic import BaseModel

from .registry import registry

# Ensure built-in handlers are imported/registered when generating a catalog.
from . import handlers as _builtin_handlers  # noqa: F401


class LogicTypeCatalogEntry(BaseModel):
    logic_type: str
    description: str = ""

    module: str
    class_name: str

    threshold_model: str
    threshold_schema: Dict[str, Any]


def build_catalog() -> List[LogicTypeCatalogEntry]:
    """Describe every registered logic type and the threshold payload it expects."""
    entries: List[LogicTypeCatalogEntry] = []
    for logic_type, handler_cls in registry.handlers():
        model = handler_cls.threshold_model
        entries.append(
            LogicTypeCatalogEntry(
                logic_type=logic_type.value,
                description=(handler_cls.__doc__ or "").strip(),
                module=handler_cls.__module__,
                class_name=handler_cls.__name__,
                threshold_model=model.__name__,
                threshold_schema=model.model_json_schema(),
            )
        )

    entries.sort(key=lambda e: e.logic_type)
    return entries


def catalog_as_json() -> str:
    return json.dumps([e.model_dump() for e in build_catalog()], indent=2, sort_keys=True)
