from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple, Type, Union

from .handler import LogicHandler
from .models import LogicType


class HandlerRegistry:
    """Maps each logic type to the one handler class that evaluates it."""

    def __init__(self):
        self._by_logic_type: Dict[LogicType, Type[LogicHandler]] = {}

    def register(self, handler_cls: Type[LogicHandler]) -> None:
        logic_type = getattr(handler_cls, "logic_type", None)
        if not isinstance(logic_type, LogicType):
            raise ValueError(f"{handler_cls.__name__} must declare a LogicType as logic_type")
        existing = self._by_logic_type.get(logic_type)
        if existing is not None:
            raise ValueError(
                f"{logic_type.value} is already handled by {existing.__name__}; cannot register {handler_cls.__name__}"
            )
        self._by_logic_type[logic_type] = handler_cls

    def lookup(self, logic_type: Union[LogicType, str]) -> Optional[Type[LogicHandler]]:
        # Rule records carry the tag as a string; unknown tags resolve to None.
        known = logic_type if isinstance(logic_type, LogicType) else LogicType.parse(logic_type)
        if known is None:
            return None
        return self._by_logic_type.get(known)

    def handlers(self) -> Iterator[Tuple[LogicType, Type[LogicHandler]]]:
        return iter(self._by_logic_type.items())

    def create_all(self) -> Dict[LogicType, LogicHandler]:
        return {logic_type: cls() for logic_type, cls in self._by_logic_type.items()}


registry = HandlerRegistry()


def register_handler(handler_cls: Type[LogicHandler]) -> Type[LogicHandler]:
    registry.register(handler_cls)
    return handler_cls
