from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Optional

__all__ = (
    "ConstraintFamily",
    "ConstraintKind",
    "MIN_DEFAULT",
    "MAX_DEFAULT",
    "ENABLED",
    "DISABLED",
    "lookup",
)

MIN_DEFAULT = 0
MAX_DEFAULT = -1
ENABLED = 1  # for REQUIRE/PROHIBIT
DISABLED = 0  # default for REQUIRE/PROHIBIT


class ConstraintFamily(Enum):
    MINIMUM = ">="
    MAXIMUM = "<="
    REQUIRE = ""
    PROHIBIT = "!"

    @property
    def default(self) -> int:
        match self:
            case ConstraintFamily.MINIMUM:
                return MIN_DEFAULT
            case ConstraintFamily.MAXIMUM:
                return MAX_DEFAULT
            case ConstraintFamily.REQUIRE | ConstraintFamily.PROHIBIT:
                return DISABLED


class ConstraintKind(StrEnum):
    """
    The closed set of password constraints.

    The member value is the token used in rule specifications. Declaration order
    is the canonical formatting order and must not change.
    """

    LENGTH = "length"
    UPPERCASE = "upper"
    LOWERCASE = "lower"
    DIGIT = "digit"
    SPECIAL = "special"
    AGE = "age"
    REUSE = "repeat"
    USER_SUBSTRING = "user"

    @property
    def token(self) -> str:
        return self.value

    @property
    def family(self) -> ConstraintFamily:
        return _FAMILIES[self]

    @property
    def default(self) -> int:
        return self.family.default

    def is_enabled(self, value: Optional[int]) -> bool:
        return value is not None and value != self.default

    def format_clause(self, value: Optional[int]) -> str:
        """Returns the clause for ``value``, or an empty string if disabled."""
        if not self.is_enabled(value):
            return ""

        match self.family:
            case ConstraintFamily.MINIMUM:
                return "%s>=%d" % (self.token, value)
            case ConstraintFamily.MAXIMUM:
                return "%s<=%d" % (self.token, value)
            case ConstraintFamily.REQUIRE:
                return self.token
            case ConstraintFamily.PROHIBIT:
                return "!%s" % self.token


_FAMILIES = MappingProxyType(
    {
        ConstraintKind.LENGTH: ConstraintFamily.MINIMUM,
        ConstraintKind.UPPERCASE: ConstraintFamily.MINIMUM,
        ConstraintKind.LOWERCASE: ConstraintFamily.MINIMUM,
        ConstraintKind.DIGIT: ConstraintFamily.MINIMUM,
        ConstraintKind.SPECIAL: ConstraintFamily.MINIMUM,
        ConstraintKind.AGE: ConstraintFamily.MAXIMUM,
        ConstraintKind.REUSE: ConstraintFamily.MINIMUM,
        ConstraintKind.USER_SUBSTRING: ConstraintFamily.PROHIBIT,
    }
)

_INDEX = MappingProxyType({kind.token.lower(): kind for kind in ConstraintKind})


def lookup(token: str) -> Optional[ConstraintKind]:
    """Resolves a specification token, ignoring case."""
    return _INDEX.get(token.lower())
