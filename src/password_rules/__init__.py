__all__ = (
    "exc",
    "CharacterClass",
    "ConstraintFamily",
    "ConstraintKind",
    "HistoryMatcher",
    "MatchResult",
    "PasswordRulesDTO",
    "RuleSet",
    "SequenceHistoryMatcher",
    "ViolationEvaluator",
    "classify",
    "classify_counts",
    "format_spec",
    "parse_spec",
)
__version__ = "0.1.0"

from . import exc
from .chartype import CharacterClass, classify, classify_counts
from .constraint import ConstraintFamily, ConstraintKind
from .dto import PasswordRulesDTO
from .evaluator import ViolationEvaluator
from .history import HistoryMatcher, MatchResult, SequenceHistoryMatcher
from .parser import format_spec, parse_spec
from .rules import RuleSet
