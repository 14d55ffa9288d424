from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.core.validators import MaxLengthValidator

from spreadsheet_import.exceptions import ConfigurationError
from spreadsheet_import.rules import compile_rules, is_blank, parse_rule


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, ()])
    def test_blank_values(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, False, "0", "a", [None]])
    def test_non_blank_values(self, value):
        assert is_blank(value) is False


class TestParseRule:
    def test_required_is_implicit(self):
        rule = parse_rule("required")
        assert rule.name == "required"
        assert rule.implicit is True
        with pytest.raises(ValidationError):
            rule("  ")

    def test_email(self):
        rule = parse_rule("email")
        rule(" jane@example.com ")
        with pytest.raises(ValidationError):
            rule("not-an-email")

    def test_max_uses_length_for_text_and_value_for_numbers(self):
        rule = parse_rule("max:3")
        rule("abc")
        rule(3)
        with pytest.raises(ValidationError):
            rule("abcd")
        with pytest.raises(ValidationError):
            rule(4)

    def test_min_with_decimal_value(self):
        rule = parse_rule("min:1.5")
        rule(Decimal("1.5"))
        with pytest.raises(ValidationError):
            rule(1.2)

    def test_between(self):
        rule = parse_rule("between:18,65")
        rule(30)
        with pytest.raises(ValidationError):
            rule(70)

    def test_integer_accepts_whole_numbers_in_any_form(self):
        rule = parse_rule("integer")
        rule(12)
        rule(12.0)
        rule(" -7 ")
        with pytest.raises(ValidationError):
            rule("12.5")
        with pytest.raises(ValidationError):
            rule(True)

    def test_numeric(self):
        rule = parse_rule("numeric")
        rule("12.5")
        rule(3)
        with pytest.raises(ValidationError):
            rule("twelve")

    def test_boolean(self):
        rule = parse_rule("boolean")
        rule("TRUE")
        rule(0)
        with pytest.raises(ValidationError):
            rule("maybe")

    def test_date(self):
        rule = parse_rule("date")
        rule("2024-01-15")
        with pytest.raises(ValidationError):
            rule("2024-02-30")
        with pytest.raises(ValidationError):
            rule("yesterday")

    def test_in_and_not_in(self):
        parse_rule("in:gold, silver")("silver")
        with pytest.raises(ValidationError):
            parse_rule("in:gold,silver")("bronze")
        with pytest.raises(ValidationError):
            parse_rule("not_in:admin,root")("root")

    def test_regex_keeps_commas_and_strips_delimiters(self):
        rule = parse_rule("regex:/^[A-Z]{2,3}$/")
        rule("VN")
        with pytest.raises(ValidationError):
            rule("vn")

    def test_digits(self):
        rule = parse_rule("digits:4")
        rule("0042")
        rule(1234)
        with pytest.raises(ValidationError):
            rule("42")

    def test_size(self):
        parse_rule("size:2")("ab")
        with pytest.raises(ValidationError):
            parse_rule("size:2")(3)

    def test_callable_rule_uses_validator_code_as_name(self):
        rule = parse_rule(MaxLengthValidator(2))
        assert rule.name == "max_length"
        with pytest.raises(ValidationError):
            rule("abc")

    def test_unknown_rule_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            parse_rule("unique:customers")

    def test_invalid_argument_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            parse_rule("max:many")

    def test_parametrized_rule_without_argument_is_unknown(self):
        with pytest.raises(ConfigurationError):
            parse_rule("max")


class TestCompileRules:
    def test_required_field_gets_leading_required_rule(self):
        rules = compile_rules(["email"], required=True)
        assert [rule.name for rule in rules] == ["required", "email"]

    def test_explicit_required_is_not_duplicated(self):
        rules = compile_rules(["email", "required"], required=True)
        assert [rule.name for rule in rules] == ["email", "required"]

    def test_optional_field_keeps_rules_as_given(self):
        assert [rule.name for rule in compile_rules(["max:5"])] == ["max"]
