"""Tests for password change verification."""

from datetime import datetime, timedelta
from unittest import mock

import pytest

from password_rules.constraint import ConstraintKind
from password_rules.history import SequenceHistoryMatcher
from password_rules.rules import RuleSet
from password_rules.validator import (
    ChangeError,
    PasswordChangeRequest,
    VerificationResult,
    is_password_expired,
)

RULES = RuleSet.from_spec("length>=8 digit>=1 repeat>=2 !user")


def _request(**kwargs) -> PasswordChangeRequest:
    defaults = {
        "username": "alice",
        "new_password": "s3cretpass",
        "confirm_password": "s3cretpass",
        "rules": RULES,
    }
    defaults.update(kwargs)
    return PasswordChangeRequest(**defaults)


class TestFormChecks:
    @pytest.mark.parametrize("new_password", [None, "", "   "])
    def test_blank_password(self, new_password):
        result = _request(new_password=new_password).verify()
        assert result.error is ChangeError.BLANK_PASSWORD
        assert not result.ok

    @pytest.mark.parametrize("confirm_password", [None, "", "  "])
    def test_blank_confirmation(self, confirm_password):
        result = _request(confirm_password=confirm_password).verify()
        assert result.error is ChangeError.CONFIRM_PASSWORD

    def test_mismatch(self):
        result = _request(confirm_password="s3cretpasS").verify()
        assert result.error is ChangeError.PASSWORDS_MUST_MATCH

    def test_error_values_are_catalog_keys(self):
        assert ChangeError.PASSWORDS_MUST_MATCH == "PasswordsMustMatch"


class TestPolicy:
    def test_accepted(self):
        assert _request().verify() == VerificationResult()

    def test_violations(self):
        result = _request(new_password="alice", confirm_password="alice").verify()
        assert result.error is ChangeError.NOT_PASSWORD_POLICY
        assert result.violations == {
            ConstraintKind.LENGTH,
            ConstraintKind.DIGIT,
            ConstraintKind.USER_SUBSTRING,
        }

    def test_reused_password(self):
        history = SequenceHistoryMatcher(("0ldpassword", "s3cretpass"))
        result = _request(matcher=history).verify()
        assert result.error is ChangeError.NOT_PASSWORD_POLICY
        assert result.violations == {ConstraintKind.REUSE}

    def test_policy_evaluates_new_password(self):
        with mock.patch.object(
            RuleSet, "content_violations", return_value=frozenset()
        ) as evaluate:
            assert _request().verify().ok
        evaluate.assert_called_once_with("s3cretpass", "alice", None)

    def test_unchanged_password_skips_policy(self):
        result = _request(
            new_password="x", confirm_password="x", password_changed=False
        ).verify()
        assert result.ok

    def test_policy_not_enforced(self):
        result = _request(
            new_password="x", confirm_password="x", enforce_policy=False
        ).verify()
        assert result.ok


class TestExpiry:
    def test_delegates_to_rules(self):
        now = datetime(2024, 1, 10)
        rules = RuleSet.from_spec("age<=3")
        assert is_password_expired(now - timedelta(days=4), rules, now)
        assert not is_password_expired(now - timedelta(days=1), rules, now)
