from .base import Predicate
from .registry import Evaluator, evaluate, make_predicates

__all__ = ["Predicate", "Evaluator", "evaluate", "make_predicates"]
