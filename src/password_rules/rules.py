from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from typing_extensions import override

from .constraint import ConstraintKind
from .dto import PasswordRulesDTO
from .evaluator import ViolationEvaluator
from .history import HistoryMatcher
from .parser import format_spec, parse_spec

__all__ = ("RuleSet",)


@dataclass(slots=True, eq=False)
class RuleSet:
    """
    A password policy: the configured value of each constraint.

    Constraints without a stored value behave as their default, i.e. disabled.
    Consumers treat a rule set as immutable once built; :meth:`set` exists for
    building one up and returns the same instance for chaining::

        rules = RuleSet().set(ConstraintKind.LENGTH, 12).set(ConstraintKind.DIGIT, 1)
        assert str(rules) == "length>=12 digit>=1"
    """

    values: Mapping[ConstraintKind, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.values = {
            ConstraintKind(kind): value for kind, value in self.values.items()
        }

    @classmethod
    def from_spec(cls, spec: Optional[str]) -> "RuleSet":
        """
        Parses a rule specification such as ``"length>=8 digit>=1 !user"``.

        Raises:
            SpecificationSyntaxError: The specification is malformed.
        """
        return cls(parse_spec(spec))

    @classmethod
    def from_fields(
        cls, fields: PasswordRulesDTO | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> "RuleSet":
        """
        Builds a rule set from named fields, e.g. ``min_length=8, no_user=True``.

        Raises:
            pydantic.ValidationError: A field is unknown or out of range.
        """
        if not isinstance(fields, PasswordRulesDTO):
            fields = PasswordRulesDTO.model_validate({**(fields or {}), **kwargs})
        return cls(fields.to_values())

    def to_fields(self) -> PasswordRulesDTO:
        return PasswordRulesDTO.from_values(self.values)

    def get(self, kind: ConstraintKind) -> int:
        return self.values.get(kind, kind.default)

    def set(self, kind: ConstraintKind, value: int) -> "RuleSet":
        self.values[ConstraintKind(kind)] = value  # type: ignore[index]
        return self

    def to_string(self) -> str:
        """Returns the canonical, parseable form of the rules."""
        return format_spec(self.values)

    @override
    def __str__(self) -> str:
        return self.to_string()

    @override
    def __repr__(self) -> str:
        return "%s(%r)" % (type(self).__name__, self.to_string())

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return all(self.get(kind) == other.get(kind) for kind in ConstraintKind)

    __hash__ = None  # type: ignore[assignment]

    @property
    def min_length(self) -> int:
        return self.get(ConstraintKind.LENGTH)

    @property
    def min_upper(self) -> int:
        return self.get(ConstraintKind.UPPERCASE)

    @property
    def min_lower(self) -> int:
        return self.get(ConstraintKind.LOWERCASE)

    @property
    def min_digit(self) -> int:
        return self.get(ConstraintKind.DIGIT)

    @property
    def min_special(self) -> int:
        return self.get(ConstraintKind.SPECIAL)

    @property
    def min_unique(self) -> int:
        """Number of previous passwords that may not be reused."""
        return self.get(ConstraintKind.REUSE)

    @property
    def max_age(self) -> int:
        """Days before a password change is required."""
        return self.get(ConstraintKind.AGE)

    @property
    def no_user(self) -> bool:
        return ConstraintKind.USER_SUBSTRING.is_enabled(
            self.get(ConstraintKind.USER_SUBSTRING)
        )

    @property
    def require_mixed_case(self) -> bool:
        return self.min_upper + self.min_lower > 0

    @property
    def require_digits(self) -> bool:
        return self.min_digit > 0

    @property
    def require_special(self) -> bool:
        return self.min_special > 0

    @property
    def prevent_repeats(self) -> bool:
        return self.min_unique > 0

    @property
    def expire_passwords(self) -> bool:
        return self.max_age > 0

    @property
    def restrict_user(self) -> bool:
        return self.no_user

    @property
    def evaluator(self) -> ViolationEvaluator:
        return ViolationEvaluator(self)

    def content_violations(
        self,
        password: str,
        user: Optional[str] = None,
        matcher: Optional[HistoryMatcher] = None,
    ) -> frozenset[ConstraintKind]:
        return self.evaluator.evaluate(password, user, matcher)

    def too_old(self, last_changed: datetime, now: Optional[datetime] = None) -> bool:
        return self.evaluator.too_old(last_changed, now)
