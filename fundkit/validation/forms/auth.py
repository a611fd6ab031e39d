"""
Authentication, profile and KYC form schemas.
"""
from typing import Dict

from fundkit.config.constants import MIN_INVESTOR_AGE
from fundkit.validation.primitives import is_valid_email, is_valid_otp, is_valid_password
from fundkit.validation.rules import (
    FormSchema,
    accepted,
    check,
    differs_from_field,
    field_equals,
    field_is_set,
    identifier,
    matches_field,
    min_age,
    min_length,
    required,
    required_if,
    valid_date,
    when,
)

PASSWORD_STRENGTH_MESSAGE = (
    "Password must contain at least 8 characters, including uppercase, "
    "lowercase, number, and special character"
)

_email = [
    required("Email is required"),
    check(is_valid_email, "Please enter a valid email address"),
]
_phone = [
    required("Phone number is required"),
    identifier("phone", "Please enter a valid 10-digit phone number"),
]
_pan = [
    required("PAN number is required"),
    identifier("tax_id", "Please enter a valid PAN number"),
]


LOGIN = FormSchema.define("login", {
    "email": _email,
    "password": [
        required("Password is required"),
        min_length(8, "Password must be at least 8 characters long"),
    ],
})

REGISTRATION = FormSchema.define("registration", {
    "firstName": [
        required("First name is required"),
        min_length(2, "First name must be at least 2 characters long"),
    ],
    "lastName": [required("Last name is required")],
    "email": _email,
    "phone": _phone,
    "password": [
        required("Password is required"),
        check(is_valid_password, PASSWORD_STRENGTH_MESSAGE),
    ],
    "confirmPassword": [
        required("Please confirm your password"),
        matches_field("password", "Passwords do not match"),
    ],
    "acceptTerms": [accepted("You must accept the terms and conditions")],
})

FORGOT_PASSWORD = FormSchema.define("forgot_password", {
    "email": _email,
})

RESET_PASSWORD = FormSchema.define("reset_password", {
    "password": [
        required("Password is required"),
        check(is_valid_password, PASSWORD_STRENGTH_MESSAGE),
    ],
    "confirmPassword": [
        required("Please confirm your password"),
        matches_field("password", "Passwords do not match"),
    ],
    "token": [required("Reset token is required")],
})

PROFILE = FormSchema.define("profile", {
    "firstName": [required("First name is required")],
    "lastName": [required("Last name is required")],
    "email": _email,
    "phone": _phone,
    "dateOfBirth": [
        required("Date of birth is required"),
        valid_date("Please enter a valid date of birth"),
        min_age(MIN_INVESTOR_AGE, "You must be at least 18 years old"),
    ],
    "panNumber": _pan,
    "address": [required("Address is required")],
    "city": [required("City is required")],
    "state": [required("State is required")],
    "pincode": [
        required("Pincode is required"),
        identifier("postal_code", "Please enter a valid 6-digit pincode"),
    ],
})

KYC = FormSchema.define("kyc", {
    "panNumber": _pan,
    "aadhaarNumber": [
        when(
            field_is_set("hasAadhaar"),
            required("Aadhaar number is required"),
            identifier("national_id", "Please enter a valid 12-digit Aadhaar number"),
        ),
    ],
    "occupation": [required("Occupation is required")],
    "annualIncome": [required("Annual income is required")],
    "bankAccountNumber": [
        required("Bank account number is required"),
        identifier("bank_account", "Please enter a valid bank account number"),
    ],
    "bankName": [required("Bank name is required")],
    "branchName": [required("Branch name is required")],
    "ifscCode": [
        required("IFSC code is required"),
        identifier("bank_code", "Please enter a valid IFSC code"),
    ],
    "nomineeName": [required_if(field_is_set("hasNominee"), "Nominee name is required")],
    "nomineeRelationship": [
        required_if(field_is_set("hasNominee"), "Nominee relationship is required"),
    ],
})

CHANGE_PASSWORD = FormSchema.define("change_password", {
    "currentPassword": [required("Current password is required")],
    "newPassword": [
        required("New password is required"),
        check(is_valid_password, PASSWORD_STRENGTH_MESSAGE),
        differs_from_field("currentPassword", "New password must be different from current password"),
    ],
    "confirmPassword": [
        required("Please confirm your password"),
        matches_field("newPassword", "Passwords do not match"),
    ],
})

OTP = FormSchema.define("otp", {
    "otp": [
        required("OTP is required"),
        check(is_valid_otp, "Please enter a valid 6-digit OTP"),
    ],
})

TWO_FACTOR_SETUP = FormSchema.define("two_factor_setup", {
    "method": [required("Please select a 2FA method")],
    "verificationCode": [
        required_if(field_equals("method", "authenticator"), "Verification code is required"),
    ],
    "phone": [
        when(
            field_equals("method", "sms"),
            required("Phone number is required"),
            identifier("phone", "Please enter a valid 10-digit phone number"),
        ),
    ],
})


AUTH_SCHEMAS: Dict[str, FormSchema] = {
    schema.name: schema
    for schema in (
        LOGIN,
        REGISTRATION,
        FORGOT_PASSWORD,
        RESET_PASSWORD,
        PROFILE,
        KYC,
        CHANGE_PASSWORD,
        OTP,
        TWO_FACTOR_SETUP,
    )
}
