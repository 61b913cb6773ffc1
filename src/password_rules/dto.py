from collections.abc import Mapping
from typing import Annotated

import annotated_types
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .constraint import DISABLED, ENABLED, MAX_DEFAULT, MIN_DEFAULT, ConstraintKind

__all__ = ("PasswordRulesDTO",)

NonNegativeInt = Annotated[int, annotated_types.Ge(0)]


class PasswordRulesDTO(BaseModel):
    """
    Named-field definition of a rule set, as found in configuration files.

    Example (YAML)::

        minLength: 12
        minDigit: 1
        maxAge: 90
        minUnique: 5
        noUser: true
    """

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    min_length: NonNegativeInt = MIN_DEFAULT
    min_upper: NonNegativeInt = MIN_DEFAULT
    min_lower: NonNegativeInt = MIN_DEFAULT
    min_digit: NonNegativeInt = MIN_DEFAULT
    min_special: NonNegativeInt = MIN_DEFAULT
    max_age: Annotated[int, annotated_types.Ge(MAX_DEFAULT)] = MAX_DEFAULT
    min_unique: NonNegativeInt = MIN_DEFAULT
    no_user: bool = False

    def to_values(self) -> dict[ConstraintKind, int]:
        return {
            ConstraintKind.LENGTH: self.min_length,
            ConstraintKind.UPPERCASE: self.min_upper,
            ConstraintKind.LOWERCASE: self.min_lower,
            ConstraintKind.DIGIT: self.min_digit,
            ConstraintKind.SPECIAL: self.min_special,
            ConstraintKind.AGE: self.max_age,
            ConstraintKind.REUSE: self.min_unique,
            ConstraintKind.USER_SUBSTRING: ENABLED if self.no_user else DISABLED,
        }

    @classmethod
    def from_values(cls, values: Mapping[ConstraintKind, int]) -> "PasswordRulesDTO":
        def get(kind: ConstraintKind) -> int:
            return values.get(kind, kind.default)

        return cls(
            min_length=get(ConstraintKind.LENGTH),
            min_upper=get(ConstraintKind.UPPERCASE),
            min_lower=get(ConstraintKind.LOWERCASE),
            min_digit=get(ConstraintKind.DIGIT),
            min_special=get(ConstraintKind.SPECIAL),
            max_age=get(ConstraintKind.AGE),
            min_unique=get(ConstraintKind.REUSE),
            no_user=ConstraintKind.USER_SUBSTRING.is_enabled(
                values.get(ConstraintKind.USER_SUBSTRING)
            ),
        )
