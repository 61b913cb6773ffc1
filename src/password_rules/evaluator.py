import logging
import threading
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Optional

from .chartype import CharacterClass, classify_counts
from .constraint import ConstraintKind
from .history import HistoryMatcher, MatchResult

if typing.TYPE_CHECKING:
    from .rules import RuleSet

__all__ = ("ViolationEvaluator",)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Evaluation:
    password: str
    user: Optional[str]
    matcher: Optional[HistoryMatcher]
    _counts: Optional[dict[CharacterClass, int]] = field(init=False, default=None)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    @property
    def counts(self) -> dict[CharacterClass, int]:
        with self._lock:
            if self._counts is None:
                self._counts = classify_counts(self.password)
            return self._counts


Check = Callable[[_Evaluation, int], bool]


def _min_chars(char_class: CharacterClass) -> Check:
    def check(ev: _Evaluation, limit: int) -> bool:
        return ev.counts[char_class] < limit

    return check


def _check_length(ev: _Evaluation, limit: int) -> bool:
    return len(ev.password) < limit


def _check_age(ev: _Evaluation, limit: int) -> bool:
    # expiration is checked separately, see ViolationEvaluator.too_old
    return False


def _check_reuse(ev: _Evaluation, limit: int) -> bool:
    if ev.matcher is None:
        return False

    result = MatchResult.NO_GENERATION
    for generation in range(limit):
        result = ev.matcher.matches(ev.password, generation)
        if result is not MatchResult.NO_MATCH:
            break
    return result is MatchResult.MATCH


def _check_user(ev: _Evaluation, limit: int) -> bool:
    if ev.user is None:
        return False
    return ev.user.lower() in ev.password.lower()


_CHECKS: Mapping[ConstraintKind, Check] = MappingProxyType(
    {
        ConstraintKind.LENGTH: _check_length,
        ConstraintKind.UPPERCASE: _min_chars(CharacterClass.UPPER),
        ConstraintKind.LOWERCASE: _min_chars(CharacterClass.LOWER),
        ConstraintKind.DIGIT: _min_chars(CharacterClass.DIGIT),
        ConstraintKind.SPECIAL: _min_chars(CharacterClass.SPECIAL),
        ConstraintKind.AGE: _check_age,
        ConstraintKind.REUSE: _check_reuse,
        ConstraintKind.USER_SUBSTRING: _check_user,
    }
)


@dataclass(slots=True, frozen=True)
class ViolationEvaluator:
    """
    Evaluates passwords against a :class:`~password_rules.rules.RuleSet`.

    The rule set is only read, so one evaluator may be shared between threads.
    """

    rules: "RuleSet"

    def evaluate(
        self,
        password: str,
        user: Optional[str] = None,
        matcher: Optional[HistoryMatcher] = None,
    ) -> frozenset[ConstraintKind]:
        """
        Analyzes a proposed password and returns the constraints it violates. An
        empty set means the password is accepted.

        ``user`` and ``matcher`` may be omitted, which disables the username and
        reuse constraints respectively (for example when no password history is
        available). Expiration is not checked here, see :meth:`too_old`.

        Args:
            password: The new password.
            user: The username, required to check the username constraint.
            matcher: A password history matcher, required to check reuse.
        """
        ev = _Evaluation(password=password, user=user, matcher=matcher)
        violations: set[ConstraintKind] = set()
        for kind in ConstraintKind:
            limit = self.rules.get(kind)
            if kind.is_enabled(limit) and _CHECKS[kind](ev, limit):
                violations.add(kind)

        if violations:
            logger.debug(
                "password violates %s", ", ".join(sorted(map(str, violations)))
            )
        return frozenset(violations)

    def too_old(self, last_changed: datetime, now: Optional[datetime] = None) -> bool:
        """
        Checks when an existing password was last changed against the maximum
        age.

        Returns:
            True if a positive maximum age is configured and more than that many
            days have passed since ``last_changed``.
        """
        max_age = self.rules.get(ConstraintKind.AGE)
        if max_age <= 0:
            return False

        if now is None:
            now = datetime.now(tz=last_changed.tzinfo)
        # timedelta holds at most timedelta.max.days days
        return now - last_changed > timedelta(days=min(max_age, timedelta.max.days))
