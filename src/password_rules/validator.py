import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Optional

from .constraint import ConstraintKind
from .history import HistoryMatcher
from .rules import RuleSet

__all__ = (
    "ChangeError",
    "VerificationResult",
    "PasswordChangeRequest",
    "is_password_expired",
)

logger = logging.getLogger(__name__)


class ChangeError(StrEnum):
    """Message catalog keys describing why a password change was rejected."""

    BLANK_PASSWORD = "BlankPasswordError"
    CONFIRM_PASSWORD = "ConfirmPasswordEntry"
    PASSWORDS_MUST_MATCH = "PasswordsMustMatch"
    NOT_PASSWORD_POLICY = "NotPasswordPolicy"


@dataclass(slots=True, frozen=True)
class VerificationResult:
    error: Optional[ChangeError] = None
    violations: frozenset[ConstraintKind] = frozenset()

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@dataclass(slots=True)
class PasswordChangeRequest:
    """
    Validates a password change form: the new password, its confirmation and,
    when the password actually changed, the rule set.

    Attributes:
        username: The account name, checked by the username constraint.
        new_password: The proposed password.
        confirm_password: The proposed password, typed a second time.
        rules: The policy to enforce.
        matcher: Password history of the account, checked by the reuse constraint.
        password_changed: Whether the proposed password differs from the stored
            one. Policy checks are skipped otherwise.
        enforce_policy: Whether the account is subject to the policy at all.
    """

    username: Optional[str]
    new_password: Optional[str]
    confirm_password: Optional[str]
    rules: RuleSet = field(default_factory=RuleSet)
    matcher: Optional[HistoryMatcher] = None
    password_changed: bool = True
    enforce_policy: bool = True

    def verify(self) -> VerificationResult:
        password = self.new_password
        if password is None or _is_blank(password):
            return VerificationResult(error=ChangeError.BLANK_PASSWORD)
        if _is_blank(self.confirm_password):
            return VerificationResult(error=ChangeError.CONFIRM_PASSWORD)
        if password != self.confirm_password:
            return VerificationResult(error=ChangeError.PASSWORDS_MUST_MATCH)

        if not (self.password_changed and self.enforce_policy):
            return VerificationResult()

        violations = self.rules.content_violations(
            password, self.username, self.matcher
        )
        if violations:
            logger.debug("password change for %r rejected by policy", self.username)
            return VerificationResult(
                error=ChangeError.NOT_PASSWORD_POLICY, violations=violations
            )
        return VerificationResult()


def is_password_expired(
    last_changed: datetime, rules: RuleSet, now: Optional[datetime] = None
) -> bool:
    return rules.too_old(last_changed, now)
