"""
Unit tests for the rule combinators and FormSchema runner.
"""
from datetime import date

import pytest

from fundkit.models.validation import ValidationResult
from fundkit.validation.primitives import INDIA_IDENTIFIERS
from fundkit.validation.rules import (
    FormContext,
    FormSchema,
    accepted,
    amount_between,
    at_least,
    check,
    differs_from_field,
    field_equals,
    identifier,
    list_size,
    matches_field,
    min_age,
    not_above_field,
    not_after_field,
    not_in_future,
    not_in_past,
    required,
    required_if,
    when,
    within_days_of_field,
)

TODAY = date(2025, 6, 15)


def ctx(**payload):
    return FormContext(payload, INDIA_IDENTIFIERS, TODAY)


class TestFormContext:
    def test_is_read_only_mapping(self):
        context = ctx(a=1, b=2)
        assert dict(context) == {"a": 1, "b": 2}
        assert len(context) == 2
        with pytest.raises(TypeError):
            context["a"] = 3  # type: ignore[index]

    def test_today_defaults_to_current_date(self):
        assert FormContext({}).today == date.today()


class TestPresenceRules:
    def test_required_treats_zero_and_false_as_present(self):
        rule = required("missing")
        assert rule(0, ctx()) is None
        assert rule(False, ctx()) is None
        assert rule("  ", ctx()) == "missing"
        assert rule(None, ctx()) == "missing"

    def test_required_if(self):
        rule = required_if(field_equals("kind", "sip"), "needed")
        assert rule(None, ctx(kind="sip")) == "needed"
        assert rule(None, ctx(kind="lumpsum")) is None

    def test_accepted_rejects_false(self):
        rule = accepted("accept")
        assert rule(False, ctx()) == "accept"
        assert rule(True, ctx()) is None

    def test_when_runs_rules_in_order(self):
        rule = when(field_equals("on", True), required("first"), check(lambda v: False, "second"))
        assert rule(None, ctx(on=True)) == "first"
        assert rule("x", ctx(on=True)) == "second"
        assert rule(None, ctx(on=False)) is None


class TestFormatRules:
    def test_check_skips_blank(self):
        rule = check(lambda v: False, "bad")
        assert rule("", ctx()) is None
        assert rule("x", ctx()) == "bad"

    def test_identifier_uses_context_rules(self):
        rule = identifier("tax_id", "bad pan")
        assert rule("ABCDE1234F", ctx()) is None
        assert rule("ABC", ctx()) == "bad pan"

    def test_list_size(self):
        rule = list_size(2, 3, "few", "many")
        assert rule(None, ctx()) == "few"
        assert rule(["a"], ctx()) == "few"
        assert rule(["a", "b"], ctx()) is None
        assert rule(["a", "b", "c", "d"], ctx()) == "many"


class TestNumericRules:
    def test_amount_between(self):
        rule = amount_between(500, 1000, "range")
        assert rule("499.99", ctx()) == "range"
        assert rule(500, ctx()) is None
        assert rule("abc", ctx()) == "range"

    def test_at_least_ignores_non_numeric(self):
        rule = at_least(6, "short")
        assert rule(5, ctx()) == "short"
        assert rule(6, ctx()) is None
        assert rule("abc", ctx()) is None

    def test_not_above_field(self):
        rule = not_above_field("max", "inverted")
        assert rule(10, ctx(max=5)) == "inverted"
        assert rule(5, ctx(max=5)) is None
        assert rule(10, ctx()) is None


class TestDateRules:
    def test_not_in_past_allows_today(self):
        rule = not_in_past("past")
        assert rule("2025-06-15", ctx()) is None
        assert rule("2025-06-14", ctx()) == "past"

    def test_not_in_future(self):
        rule = not_in_future("future")
        assert rule("2025-06-16", ctx()) == "future"
        assert rule("2025-06-15T23:00:00", ctx()) is None

    def test_min_age(self):
        rule = min_age(18, "young")
        assert rule("2007-06-16", ctx()) == "young"
        assert rule("2007-06-15", ctx()) is None

    def test_not_after_field(self):
        rule = not_after_field("end", "order")
        assert rule("2025-02-01", ctx(end="2025-01-01")) == "order"
        assert rule("2025-01-01", ctx(end="2025-01-01")) is None

    def test_within_days_of_field(self):
        rule = within_days_of_field("start", 365, "too long")
        assert rule("2025-01-01", ctx(start="2024-01-02")) is None
        assert rule("2025-01-01", ctx(start="2023-12-31")) == "too long"


class TestEqualityRules:
    def test_matches_field(self):
        rule = matches_field("password", "mismatch")
        assert rule("a", ctx(password="b")) == "mismatch"
        assert rule("a", ctx(password="a")) is None

    def test_differs_from_field(self):
        rule = differs_from_field("source", "same")
        assert rule("F1", ctx(source="F1")) == "same"
        assert rule("F2", ctx(source="F1")) is None


class TestFormSchema:
    @pytest.fixture
    def schema(self):
        return FormSchema.define(
            "demo",
            {
                "name": [required("Name is required")],
                "age": [required("Age is required"), at_least(18, "Too young")],
            },
            checks=[lambda context: {"name": "overridden", "form": "form-level"}],
        )

    def test_every_failing_field_reported(self, schema):
        result = schema.validate({})
        assert result.errors["name"] == "Name is required"
        assert result.errors["age"] == "Age is required"

    def test_first_failing_rule_wins(self, schema):
        result = schema.validate({"name": "x", "age": 10})
        assert result.errors["age"] == "Too young"

    def test_checks_do_not_replace_field_messages(self, schema):
        result = schema.validate({})
        assert result.errors["name"] == "Name is required"
        assert result.errors["form"] == "form-level"

    def test_returns_fresh_result(self, schema):
        first = schema.validate({"name": "x", "age": 20})
        second = schema.validate({"name": "x", "age": 20})
        assert isinstance(first, ValidationResult)
        assert first is not second

    def test_non_mapping_payload_raises(self, schema):
        with pytest.raises(TypeError):
            schema.validate(["not", "a", "mapping"])

    def test_field_names_keep_order(self, schema):
        assert schema.field_names == ("name", "age")
