"""
Unit tests for fundkit.validation.engine.
"""
import pytest

from fundkit.models.validation import ValidationResult
from fundkit.validation.engine import (
    SCHEMAS,
    FormValidator,
    UnknownSchemaError,
    get_validator,
    schema_names,
    validate,
)
from fundkit.validation.primitives import INDIA_IDENTIFIERS, IdentifierRules
from fundkit.validation.rules import FormSchema, required


EXPECTED_SCHEMAS = {
    "login", "registration", "forgot_password", "reset_password", "profile",
    "kyc", "change_password", "otp", "two_factor_setup",
    "fund_investment", "fund_redemption", "sip_setup", "swp_setup", "stp_setup",
    "fund_filter", "fund_comparison", "goal_allocation",
    "transaction_filter", "manual_transaction", "bulk_transaction_upload",
    "transaction_import", "transaction_reversal", "transaction_correction",
    "transaction_export", "transaction_note",
}


class TestRegistry:
    def test_every_form_registered(self):
        assert set(SCHEMAS) == EXPECTED_SCHEMAS

    def test_schema_names_sorted(self):
        names = schema_names()
        assert names == sorted(EXPECTED_SCHEMAS)

    def test_default_validator_is_shared(self):
        assert get_validator() is get_validator()


class TestValidate:
    def test_unknown_schema_raises(self):
        with pytest.raises(UnknownSchemaError) as exc_info:
            validate("no_such_form", {})
        assert exc_info.value.name == "no_such_form"
        assert isinstance(exc_info.value, LookupError)

    def test_invalid_payload_is_data(self):
        result = validate("login", {"email": "nope"})
        assert isinstance(result, ValidationResult)
        assert result.is_valid is False
        assert result.errors["email"] == "Please enter a valid email address"

    def test_non_mapping_payload_raises(self):
        with pytest.raises(TypeError):
            validate("login", "email=a@b.co")

    def test_kyc_scenario(self, kyc_payload):
        kyc_payload["aadhaarNumber"] = "12345"
        result = validate("kyc", kyc_payload)
        assert list(result.errors) == ["aadhaarNumber"]

    def test_today_is_passed_through(self, sip_payload, today):
        assert validate("sip_setup", sip_payload, today=today).is_valid

    def test_to_dict_wire_shape(self):
        result = validate("forgot_password", {"email": "a@b.co"})
        assert result.to_dict() == {"isValid": True, "errors": {}}


class TestCustomValidator:
    def test_custom_registry(self):
        schema = FormSchema.define("ping", {"host": [required("Host is required")]})
        validator = FormValidator(schemas={"ping": schema})
        assert validator.names() == ["ping"]
        assert validator.validate("ping", {}).errors == {"host": "Host is required"}
        with pytest.raises(UnknownSchemaError):
            validator.validate("login", {})

    def test_swapped_identifier_rules(self, kyc_payload):
        lenient = IdentifierRules(
            region="XX",
            tax_id=lambda v: True,
            national_id=lambda v: True,
            bank_code=lambda v: True,
            bank_account=lambda v: True,
            phone=lambda v: True,
            postal_code=lambda v: True,
        )
        kyc_payload["panNumber"] = "X-99"
        kyc_payload["ifscCode"] = "LOCAL-1"
        assert not validate("kyc", kyc_payload).is_valid
        assert validate("kyc", kyc_payload, identifiers=lenient).is_valid

    def test_default_identifiers_from_settings(self):
        assert FormValidator().identifiers is INDIA_IDENTIFIERS
