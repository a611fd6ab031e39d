"""
Validation engine — entry point for form validation by schema name.

    result = validate("kyc", payload)
    if not result.is_valid:
        render(result.errors)

Invalid user input always comes back as data. Only caller bugs raise: an
unknown schema name (UnknownSchemaError) or a payload that is not a mapping
(TypeError).
"""
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from fundkit.config.settings import IDENTIFIER_REGION
from fundkit.metrics import record_validation
from fundkit.models.validation import ValidationResult
from fundkit.validation.forms.auth import AUTH_SCHEMAS
from fundkit.validation.forms.funds import FUND_SCHEMAS
from fundkit.validation.forms.transactions import TRANSACTION_SCHEMAS
from fundkit.validation.primitives import IdentifierRules, get_identifier_rules
from fundkit.validation.rules import FormSchema

logger = logging.getLogger(__name__)


class UnknownSchemaError(LookupError):
    """Raised when a schema name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown form schema: '{name}'")
        self.name = name


SCHEMAS: Dict[str, FormSchema] = {**AUTH_SCHEMAS, **FUND_SCHEMAS, **TRANSACTION_SCHEMAS}


class FormValidator:
    """
    Validates payloads against a registry of form schemas.

    Args:
        schemas: name -> FormSchema registry. Defaults to every built-in form.
        identifiers: Country rule set for PAN/Aadhaar/IFSC-style fields.
            Defaults to the region configured in settings.
    """

    def __init__(
        self,
        schemas: Optional[Mapping[str, FormSchema]] = None,
        identifiers: Optional[IdentifierRules] = None,
    ):
        self.schemas: Dict[str, FormSchema] = dict(schemas if schemas is not None else SCHEMAS)
        self.identifiers = identifiers or get_identifier_rules(IDENTIFIER_REGION)

    def schema(self, name: str) -> FormSchema:
        try:
            return self.schemas[name]
        except KeyError:
            logger.error("Validation requested for unknown schema '%s'", name)
            raise UnknownSchemaError(name) from None

    def names(self) -> List[str]:
        return sorted(self.schemas)

    def validate(
        self,
        name: str,
        payload: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate *payload* against schema *name*.

        Args:
            name: Registered schema name (e.g. "registration", "kyc").
            payload: Form data as sent by the client.
            today: Reference date for past/future/age rules (defaults to today).

        Returns:
            ValidationResult with one message per failing field.
        """
        result = self.schema(name).validate(payload, self.identifiers, today)

        if not result.is_valid:
            # Field names only: values may carry PAN/Aadhaar/phone numbers.
            logger.debug("Form '%s' failed on fields: %s", name, sorted(result.errors))
        record_validation(name, result)
        return result


_default_validator: Optional[FormValidator] = None


def get_validator() -> FormValidator:
    """Module-level validator built from settings on first use."""
    global _default_validator
    if _default_validator is None:
        _default_validator = FormValidator()
    return _default_validator


def validate(
    schema_name: str,
    payload: Mapping[str, Any],
    identifiers: Optional[IdentifierRules] = None,
    today: Optional[date] = None,
) -> ValidationResult:
    """Validate *payload* against *schema_name* with the default registry."""
    if identifiers is not None:
        return FormValidator(identifiers=identifiers).validate(schema_name, payload, today)
    return get_validator().validate(schema_name, payload, today)


def schema_names() -> List[str]:
    return get_validator().names()
