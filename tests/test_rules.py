"""Tests for RuleSet construction, accessors and canonical strings."""

import pydantic
import pytest

from password_rules.constraint import ConstraintKind
from password_rules.dto import PasswordRulesDTO
from password_rules.exc import SpecificationSyntaxError
from password_rules.rules import RuleSet

CANONICAL = "length>=99 upper>=5 lower>=4 digit>=3 special>=2 age<=90 repeat>=1 !user"


class TestStrings:
    def test_single_clause(self):
        assert str(RuleSet.from_spec("length>=2")) == "length>=2"

    def test_reordered_to_canonical(self):
        rules = RuleSet.from_spec(
            "!user repeat>=1 age<=90 special>=2 digit>=3 lower>=4 upper>=5 length>=99"
        )
        assert rules.to_string() == CANONICAL

    def test_all_defaults_format_empty(self):
        rules = RuleSet.from_spec(
            "repeat>=0 special>=0 digit>=0 lower>=0 upper>=0 length>=0"
        )
        assert rules.to_string() == ""

    def test_empty(self):
        assert str(RuleSet()) == ""

    @pytest.mark.parametrize(
        "spec",
        [
            CANONICAL,
            "length>=8",
            "age<=0",
            "digit>=1 !user",
            "repeat>=12",
        ],
    )
    def test_round_trip(self, spec):
        assert RuleSet.from_spec(spec).to_string() == spec
        assert RuleSet.from_spec(str(RuleSet.from_spec(spec))) == RuleSet.from_spec(
            spec
        )

    def test_repr(self):
        assert repr(RuleSet.from_spec("!user length>=3")) == (
            "RuleSet('length>=3 !user')"
        )

    def test_parse_error_propagates(self):
        with pytest.raises(SpecificationSyntaxError):
            RuleSet.from_spec("length<=3")


class TestAccessors:
    def test_defaults(self):
        defaults = RuleSet()
        assert not (
            defaults.prevent_repeats
            or defaults.require_mixed_case
            or defaults.require_digits
            or defaults.require_special
            or defaults.restrict_user
            or defaults.expire_passwords
        )
        assert defaults.max_age == -1
        for kind in ConstraintKind:
            assert defaults.get(kind) == kind.default

    def test_named_values(self):
        rules = RuleSet.from_spec(CANONICAL)
        assert rules.min_length == 99
        assert rules.min_upper == 5
        assert rules.min_lower == 4
        assert rules.min_digit == 3
        assert rules.min_special == 2
        assert rules.max_age == 90
        assert rules.min_unique == 1
        assert rules.no_user is True

    def test_set_chains(self):
        rules = RuleSet()
        assert rules.set(ConstraintKind.LENGTH, 12) is rules
        rules.set(ConstraintKind.DIGIT, 1).set(ConstraintKind.USER_SUBSTRING, 1)
        assert str(rules) == "length>=12 digit>=1 !user"

    def test_set_overwrites(self):
        rules = RuleSet.from_spec("age<=3").set(ConstraintKind.AGE, -1)
        assert rules.get(ConstraintKind.AGE) == -1
        assert not rules.expire_passwords

    def test_accepts_tokens_as_keys(self):
        assert RuleSet({"length": 4}).min_length == 4

    def test_mapping_is_copied(self):
        values = {ConstraintKind.LENGTH: 4}
        rules = RuleSet(values)
        rules.set(ConstraintKind.LENGTH, 5)
        assert values[ConstraintKind.LENGTH] == 4


class TestEquality:
    def test_stored_default_equals_absent(self):
        assert RuleSet({ConstraintKind.LENGTH: 0}) == RuleSet()

    def test_different_values(self):
        assert RuleSet.from_spec("length>=1") != RuleSet.from_spec("length>=2")

    def test_not_a_rule_set(self):
        assert RuleSet() != "length>=1"


class TestFields:
    def test_from_keywords(self):
        rules = RuleSet.from_fields(min_length=8, min_digit=1, no_user=True)
        assert str(rules) == "length>=8 digit>=1 !user"

    def test_from_camel_case_mapping(self):
        rules = RuleSet.from_fields({"minLength": 8, "maxAge": 30, "minUnique": 3})
        assert str(rules) == "length>=8 age<=30 repeat>=3"

    def test_from_dto(self):
        dto = PasswordRulesDTO(min_special=2)
        assert str(RuleSet.from_fields(dto)) == "special>=2"

    def test_to_fields(self):
        dto = RuleSet.from_spec(CANONICAL).to_fields()
        assert dto == PasswordRulesDTO(
            min_length=99,
            min_upper=5,
            min_lower=4,
            min_digit=3,
            min_special=2,
            max_age=90,
            min_unique=1,
            no_user=True,
        )
        assert RuleSet.from_fields(dto) == RuleSet.from_spec(CANONICAL)

    def test_unknown_field(self):
        with pytest.raises(pydantic.ValidationError):
            RuleSet.from_fields(max_length=3)

    def test_negative_minimum(self):
        with pytest.raises(pydantic.ValidationError):
            RuleSet.from_fields(min_length=-1)
