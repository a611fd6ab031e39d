"""
Form Validation Rules — composable field rules and the FormSchema runner.

A FieldRule is ``(value, context) -> message | None``. ``context`` is a
FormContext: the whole payload as a read-only mapping, plus the active
identifier rules and the reference date used for "past"/"future" checks.

A FormSchema maps each field to an ordered list of rules. Fields are
evaluated independently, so every failing field is reported in one pass;
within a field the first failing rule wins. Format rules skip blank values,
which leaves "is it there?" to ``required`` / ``required_if``.

Payload-level FormChecks run after the fields and may report under computed
keys (``funds[2].allocation``). They never replace a field message that is
already recorded.
"""
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from fundkit.coercion import is_blank, to_datetime, to_decimal, to_timestamp
from fundkit.models.validation import ValidationResult
from fundkit.validation.primitives import (
    INDIA_IDENTIFIERS,
    IdentifierRules,
    is_non_negative_number,
    is_positive_number,
    is_valid_amount,
    is_valid_date,
)


class FormContext(Mapping):
    """Read-only view of a payload handed to every rule."""

    def __init__(
        self,
        payload: Mapping[str, Any],
        identifiers: IdentifierRules = INDIA_IDENTIFIERS,
        today: Optional[date] = None,
    ):
        self._payload = payload
        self.identifiers = identifiers
        self.today = today or date.today()

    def __getitem__(self, key: str) -> Any:
        return self._payload[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._payload)

    def __len__(self) -> int:
        return len(self._payload)


FieldRule = Callable[[Any, FormContext], Optional[str]]
Condition = Callable[[FormContext], bool]
FormCheck = Callable[[FormContext], Dict[str, str]]


# ======================================================================
# Conditions
# ======================================================================

def field_equals(field_name: str, expected: Any) -> Condition:
    return lambda context: context.get(field_name) == expected


def field_in(field_name: str, options: Sequence[Any]) -> Condition:
    return lambda context: context.get(field_name) in options


def field_is_set(field_name: str) -> Condition:
    """Truthy sibling (checked checkbox, non-empty text)."""
    return lambda context: bool(context.get(field_name)) and not is_blank(context.get(field_name))


def field_is_blank(field_name: str) -> Condition:
    return lambda context: is_blank(context.get(field_name))


def all_of(*conditions: Condition) -> Condition:
    return lambda context: all(condition(context) for condition in conditions)


# ======================================================================
# Presence
# ======================================================================

def required(message: str) -> FieldRule:
    def rule(value: Any, context: FormContext) -> Optional[str]:
        return message if is_blank(value) else None
    return rule


def required_if(condition: Condition, message: str) -> FieldRule:
    """Required only while *condition* holds for the payload."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if condition(context) and is_blank(value):
            return message
        return None
    return rule


def accepted(message: str) -> FieldRule:
    """Checkbox-style consent: the value must be truthy."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if is_blank(value) or not value:
            return message
        return None
    return rule


def when(condition: Condition, *rules: FieldRule) -> FieldRule:
    """Apply *rules* in order only while *condition* holds."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if not condition(context):
            return None
        for inner in rules:
            message = inner(value, context)
            if message:
                return message
        return None
    return rule


# ======================================================================
# Formats
# ======================================================================

def check(predicate: Callable[[Any], bool], message: str) -> FieldRule:
    """Fail with *message* when a provided value does not satisfy *predicate*."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if is_blank(value) or predicate(value):
            return None
        return message
    return rule


def identifier(kind: str, message: str) -> FieldRule:
    """Check against the context's identifier rules (``tax_id``, ``phone``, ...)."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if is_blank(value) or context.identifiers.predicate(kind)(value):
            return None
        return message
    return rule


def min_length(length: int, message: str) -> FieldRule:
    return check(lambda value: len(str(value)) >= length, message)


def max_length(length: int, message: str) -> FieldRule:
    return check(lambda value: len(str(value)) <= length, message)


def is_list(message: str) -> FieldRule:
    return check(lambda value: isinstance(value, (list, tuple)), message)


def list_size(min_items: int, max_items: Optional[int], too_few: str, too_many: str = "") -> FieldRule:
    """Missing, non-list or short values get *too_few*; long ones *too_many*."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if not isinstance(value, (list, tuple)) or len(value) < min_items:
            return too_few
        if max_items is not None and len(value) > max_items:
            return too_many
        return None
    return rule


# ======================================================================
# Numbers
# ======================================================================

def amount_between(min_amount: float, max_amount: float, message: str) -> FieldRule:
    return check(lambda value: is_valid_amount(value, min_amount, max_amount), message)


def positive(message: str) -> FieldRule:
    return check(is_positive_number, message)


def non_negative(message: str) -> FieldRule:
    return check(is_non_negative_number, message)


def at_least(minimum: float, message: str) -> FieldRule:
    """Numeric floor. Non-numeric values are left to ``positive`` & co."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        number = to_decimal(value)
        if number is not None and number < to_decimal(minimum):
            return message
        return None
    return rule


def not_above_field(other: str, message: str) -> FieldRule:
    """This numeric value must not exceed sibling *other* (min <= max)."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        low = to_decimal(value)
        high = to_decimal(context.get(other))
        if low is not None and high is not None and low > high:
            return message
        return None
    return rule


# ======================================================================
# Dates
# ======================================================================

def valid_date(message: str) -> FieldRule:
    return check(is_valid_date, message)


def not_in_past(message: str) -> FieldRule:
    """Calendar-day comparison: today itself is allowed."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        parsed = to_datetime(value)
        if parsed is not None and parsed.date() < context.today:
            return message
        return None
    return rule


def not_in_future(message: str) -> FieldRule:
    def rule(value: Any, context: FormContext) -> Optional[str]:
        parsed = to_datetime(value)
        if parsed is not None and parsed.date() > context.today:
            return message
        return None
    return rule


def min_age(years: int, message: str) -> FieldRule:
    def rule(value: Any, context: FormContext) -> Optional[str]:
        born = to_datetime(value)
        if born is not None and relativedelta(context.today, born.date()).years < years:
            return message
        return None
    return rule


def not_after_field(other: str, message: str) -> FieldRule:
    """This date must not come after sibling date *other* (start <= end)."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        start = to_timestamp(value)
        end = to_timestamp(context.get(other))
        if start is not None and end is not None and start > end:
            return message
        return None
    return rule


def within_days_of_field(other: str, days: int, message: str) -> FieldRule:
    """The span between this date and sibling *other* is at most *days*."""
    def rule(value: Any, context: FormContext) -> Optional[str]:
        this = to_timestamp(value)
        that = to_timestamp(context.get(other))
        if this is None or that is None:
            return None
        if math.ceil(abs(this - that) / 86400) > days:
            return message
        return None
    return rule


# ======================================================================
# Cross-field equality
# ======================================================================

def matches_field(other: str, message: str) -> FieldRule:
    def rule(value: Any, context: FormContext) -> Optional[str]:
        return message if value != context.get(other) else None
    return rule


def differs_from_field(other: str, message: str) -> FieldRule:
    def rule(value: Any, context: FormContext) -> Optional[str]:
        if not is_blank(value) and value == context.get(other):
            return message
        return None
    return rule


# ======================================================================
# Schema
# ======================================================================

@dataclass(frozen=True)
class FormSchema:
    """Static, ordered rule set for one form."""

    name: str
    fields: Tuple[Tuple[str, Tuple[FieldRule, ...]], ...]
    checks: Tuple[FormCheck, ...] = ()

    @classmethod
    def define(
        cls,
        name: str,
        fields: Mapping[str, Sequence[FieldRule]],
        checks: Sequence[FormCheck] = (),
    ) -> "FormSchema":
        return cls(
            name=name,
            fields=tuple((field_name, tuple(rules)) for field_name, rules in fields.items()),
            checks=tuple(checks),
        )

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(field_name for field_name, _ in self.fields)

    def validate(
        self,
        payload: Mapping[str, Any],
        identifiers: IdentifierRules = INDIA_IDENTIFIERS,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run every field's rules against *payload*.

        Returns:
            A fresh ValidationResult holding one message per failing field.
        """
        if not isinstance(payload, Mapping):
            raise TypeError(
                f"Form '{self.name}' expects a mapping payload, got {type(payload).__name__}"
            )

        context = FormContext(payload, identifiers, today)
        errors: Dict[str, str] = {}

        for field_name, rules in self.fields:
            value = payload.get(field_name)
            for rule in rules:
                message = rule(value, context)
                if message:
                    errors[field_name] = message
                    break

        for form_check in self.checks:
            for key, message in form_check(context).items():
                errors.setdefault(key, message)

        return ValidationResult(errors)

    def __repr__(self) -> str:
        return f"FormSchema({self.name}, fields={list(self.field_names)})"
