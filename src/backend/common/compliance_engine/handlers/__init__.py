from .forbidden_keyword import FORBIDDEN_KEYWORD
from .forbidden_action import FORBIDDEN_ACTION
from .forbidden_fee_type import FORBIDDEN_FEE_TYPE
from .forbidden_service import FORBIDDEN_SERVICE
from .max_percentage import MAX_PERCENTAGE
from .dynamic_cap import DYNAMIC_CAP
from .sliding_scale import SLIDING_SCALE
from .time_window import TIME_WINDOW
from .time_based_restriction import TIME_BASED_RESTRICTION
from .event_based_restriction import EVENT_BASED_RESTRICTION
from .language_requirement import LANGUAGE_REQUIREMENT
from .required_disclosure import REQUIRED_DISCLOSURE
from .dynamic_rescission import DYNAMIC_RESCISSION

__all__ = [
    "FORBIDDEN_KEYWORD",
    "FORBIDDEN_ACTION",
    "FORBIDDEN_FEE_TYPE",
    "FORBIDDEN_SERVICE",
    "MAX_PERCENTAGE",
    "DYNAMIC_CAP",
    "SLIDING_SCALE",
    "TIME_WINDOW",
    "TIME_BASED_RESTRICTION",
    "EVENT_BASED_RESTRICTION",
    "LANGUAGE_REQUIREMENT",
    "REQUIRED_DISCLOSURE",
    "DYNAMIC_RESCISSION",
]
