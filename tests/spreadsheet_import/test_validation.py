import pytest

from spreadsheet_import.constants import SEVERITY_DANGER
from spreadsheet_import.exceptions import ValidatorEngineError
from spreadsheet_import.fields import ImportField
from spreadsheet_import.validation import RowValidator


class TestRowValidator:
    def test_valid_row_returns_nested_attributes(self, notifier):
        validator = RowValidator(notifier)

        outcome = validator.validate(
            {"name": "Jane", "profile.email": "jane@example.com"},
            {
                "name": ImportField.make("name").required().get_validation_rules(),
                "profile.email": ImportField.make("profile.email").rules(["email"]).get_validation_rules(),
            },
            {},
            line_number=2,
        )

        assert outcome.failed is False
        assert outcome.attributes == {"name": "Jane", "profile": {"email": "jane@example.com"}}
        assert notifier.reports == []

    def test_failure_reports_first_error_with_line_number(self, notifier):
        validator = RowValidator(notifier)
        rules = {
            "name": ImportField.make("name").required().get_validation_rules(),
            "email": ImportField.make("email").rules(["email"]).get_validation_rules(),
        }

        outcome = validator.validate({"name": "", "email": "nope"}, rules, {}, line_number=4, labels={"name": "Name"})

        assert outcome.failed is True
        assert outcome.line_number == 4
        assert outcome.error == "Name: This field is required."
        assert notifier.reports == [
            (SEVERITY_DANGER, "Import failed", "Line 4: Name: This field is required.", True),
        ]

    def test_custom_message_replaces_default(self, notifier):
        validator = RowValidator(notifier)
        rules = {"email": ImportField.make("email").rules(["email"]).get_validation_rules()}

        outcome = validator.validate(
            {"email": "nope"},
            rules,
            {"email": {"email": "Please provide a valid e-mail"}},
            line_number=3,
        )

        assert outcome.error == "Please provide a valid e-mail"

    def test_blank_values_only_run_implicit_rules(self, notifier):
        validator = RowValidator(notifier)
        rules = {"nickname": ImportField.make("nickname").rules(["min:3"]).get_validation_rules()}

        outcome = validator.validate({"nickname": ""}, rules, {}, line_number=2)

        assert outcome.failed is False

    def test_crashing_rule_is_an_engine_error(self, notifier):
        def broken(value):
            raise RuntimeError("validator exploded")

        validator = RowValidator(notifier)
        rules = {"name": ImportField.make("name").rules([broken]).get_validation_rules()}

        with pytest.raises(ValidatorEngineError) as exc_info:
            validator.validate({"name": "Jane"}, rules, {}, line_number=2)

        assert "validator exploded" in str(exc_info.value)
        assert notifier.reports == []
