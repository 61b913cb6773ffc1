"""Tests for settings."""

import pydantic
import pytest

from password_rules._conf import Settings
from password_rules.rules import RuleSet
from password_rules.util.model import convert_errors


class TestSettings:
    def test_defaults(self):
        assert Settings().rule_set() == RuleSet()

    def test_rules_string(self):
        settings = Settings(rules="!user length>=8")
        assert str(settings.rule_set()) == "length>=8 !user"

    def test_policy_fields(self):
        settings = Settings(policy={"minLength": 8, "noUser": True})
        assert str(settings.rule_set()) == "length>=8 !user"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_RULES_RULES", "digit>=2")
        assert str(Settings().rule_set()) == "digit>=2"

    def test_policy_from_environment(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_RULES_POLICY", '{"minDigit": 2, "noUser": true}')
        assert str(Settings().rule_set()) == "digit>=2 !user"

    def test_dump_uses_camel_case(self):
        dumped = Settings(policy={"minLength": 8}).model_dump(
            by_alias=True, exclude_none=True
        )
        assert dumped["policy"]["minLength"] == 8
        assert dumped["policy"]["maxAge"] == -1

    def test_environment_takes_precedence(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_RULES_RULES", "digit>=2")
        assert str(Settings(rules="length>=1").rule_set()) == "digit>=2"

    def test_invalid_rules(self):
        with pytest.raises(pydantic.ValidationError) as exc:
            Settings(rules="length<=8")
        assert "length>=number expected" in str(exc.value)

    def test_rules_and_policy_are_exclusive(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(rules="length>=8", policy={"minLength": 8})

    def test_extra_field(self):
        with pytest.raises(pydantic.ValidationError) as exc:
            Settings(rulez="length>=8")
        errors = convert_errors(exc.value)
        assert errors[0]["type"] == "extra_field"
        assert errors[0]["msg"] == "Extra fields not allowed"
        assert "ctx" not in errors[0]
