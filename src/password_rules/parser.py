import logging
import re
from collections.abc import Mapping
from typing import Optional

from .constraint import ENABLED, ConstraintFamily, ConstraintKind, lookup
from .exc import SpecificationSyntaxError

__all__ = ("parse_spec", "format_spec")

logger = logging.getLogger(__name__)

# A clause in the specification is:
#    [!]word[op number]
# where op is <= or >=. Capture groups:
#    1: ! or nothing
#    2: the word
#    3: the first character of op, or nothing
#    4: the number, or nothing
CLAUSE = re.compile(
    r"\s*(!)?\s*(\w+)\s*(?:([><])=\s*(\d+)\s*)?", re.ASCII | re.IGNORECASE
)


def _check_clause(
    kind: ConstraintKind, bang: bool, ineq: Optional[str]
) -> Optional[str]:
    match kind.family:
        case ConstraintFamily.MINIMUM:
            if bang or ineq != ">":
                return "%s>=number expected" % kind.token
        case ConstraintFamily.MAXIMUM:
            if bang or ineq != "<":
                return "%s<=number expected" % kind.token
        case ConstraintFamily.REQUIRE:
            if bang or ineq is not None:
                return "%s expected" % kind.token
        case ConstraintFamily.PROHIBIT:
            if not bang or ineq is not None:
                return "!%s expected" % kind.token
    return None


def parse_spec(spec: Optional[str]) -> dict[ConstraintKind, int]:
    """
    Parses a rule specification into a mapping of constraint values.

    The specification is a whitespace separated list of clauses::

        length>=number     minimum password length
        upper>=number      minimum number of uppercase characters
        lower>=number      minimum number of lowercase characters
        digit>=number      minimum number of digits
        special>=number    minimum number of special characters
        age<=number        days before a password change is required
        repeat>=number     number of previous passwords that may not be reused
        !user              the password may not contain the username

    Tokens are matched case-insensitively. When a constraint appears more than
    once, the last clause wins.

    Args:
        spec: The specification to parse. ``None`` and blank strings yield an
            empty mapping.

    Raises:
        SpecificationSyntaxError: The specification contains an unknown token, a
            clause with the wrong shape for its constraint, or text that is not a
            clause at all.
    """
    values: dict[ConstraintKind, int] = {}
    if spec is None or not spec.strip():
        return values

    pos, err = 0, "parsing error"
    while (m := CLAUSE.match(spec, pos)) is not None:
        bang, token, ineq, number = m.groups()
        kind = lookup(token)
        if kind is None:
            err = "unrecognized token"
            break

        if (reason := _check_clause(kind, bang is not None, ineq)) is not None:
            err = reason
            break

        match kind.family:
            case ConstraintFamily.MINIMUM | ConstraintFamily.MAXIMUM:
                values[kind] = int(number)
            case ConstraintFamily.REQUIRE | ConstraintFamily.PROHIBIT:
                values[kind] = ENABLED

        pos = m.end()

    if pos < len(spec):
        # we didn't make it cleanly to the end
        raise SpecificationSyntaxError(
            err,
            SpecificationSyntaxError.Context(
                offset=pos, consumed=spec[:pos], remainder=spec[pos:]
            ),
        )

    logger.debug("parsed rule specification %r", spec)
    return values


def format_spec(values: Mapping[ConstraintKind, int]) -> str:
    """
    Returns the canonical form of a mapping of constraint values: enabled
    constraints in declaration order, separated by single spaces.
    """
    clauses = (kind.format_clause(values.get(kind)) for kind in ConstraintKind)
    return " ".join(clause for clause in clauses if clause)
