from .applier import InjectionState, apply_plan, per_bullet_cap
from .planner import DEFAULT_BOUNDS, build_plan, load_bounds
from .strategies import STRATEGIES, InsertionContext, insert_keyword

__all__ = [
    "DEFAULT_BOUNDS",
    "InjectionState",
    "InsertionContext",
    "STRATEGIES",
    "apply_plan",
    "build_plan",
    "insert_keyword",
    "load_bounds",
    "per_bullet_cap",
]
