"""
Shared test fixtures for the fundkit test suite.

Date rules are evaluated against a fixed reference day so that results
do not depend on when the suite runs.
"""
from datetime import date

import pytest


TODAY = date(2025, 6, 15)


@pytest.fixture
def today():
    return TODAY


# ==========================================================================
# Auth / profile payloads
# ==========================================================================

@pytest.fixture
def registration_payload():
    return {
        "firstName": "Asha",
        "lastName": "Verma",
        "email": "asha.verma@example.in",
        "phone": "9876543210",
        "password": "Abc12345!",
        "confirmPassword": "Abc12345!",
        "acceptTerms": True,
    }


@pytest.fixture
def profile_payload():
    return {
        "firstName": "Asha",
        "lastName": "Verma",
        "email": "asha.verma@example.in",
        "phone": "98765 43210",
        "dateOfBirth": "1990-04-12",
        "panNumber": "ABCDE1234F",
        "address": "12 MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411001",
    }


@pytest.fixture
def kyc_payload():
    return {
        "panNumber": "ABCDE1234F",
        "hasAadhaar": True,
        "aadhaarNumber": "1234 5678 9012",
        "occupation": "Salaried",
        "annualIncome": "10-25L",
        "bankAccountNumber": "123456789012",
        "bankName": "State Bank of India",
        "branchName": "Pune Main",
        "ifscCode": "SBIN0001234",
        "hasNominee": False,
    }


# ==========================================================================
# Fund payloads
# ==========================================================================

@pytest.fixture
def investment_payload():
    return {
        "fundId": "FUND001",
        "investmentType": "lumpsum",
        "amount": 5000,
        "paymentMethod": "upi",
        "acceptTerms": True,
    }


@pytest.fixture
def sip_payload():
    return {
        "fundId": "FUND001",
        "amount": "2500",
        "sipDate": "2025-07-05",
        "frequency": "monthly",
        "duration": 12,
        "paymentMethod": "netbanking",
        "acceptTerms": True,
    }


@pytest.fixture
def stp_payload():
    return {
        "sourceFundId": "FUND001",
        "targetFundId": "FUND002",
        "amount": 5000,
        "frequency": "monthly",
        "startDate": "2025-07-01",
        "duration": 12,
        "acknowledgeTax": True,
    }


# ==========================================================================
# Transaction payloads
# ==========================================================================

@pytest.fixture
def manual_transaction_payload():
    return {
        "type": "purchase",
        "fundId": "FUND001",
        "date": "2025-06-01",
        "amount": "10000.50",
        "nav": "45.67",
        "paymentMethod": "upi",
        "description": "Lumpsum purchase",
    }


# ==========================================================================
# Collections
# ==========================================================================

@pytest.fixture
def funds():
    return [
        {
            "id": 1, "name": "Axis Bluechip Fund", "category": "Equity",
            "risk": "High", "aum": 3.5e10, "returns": {"oneYear": 14.2},
            "launchDate": "2010-01-05",
        },
        {
            "id": 2, "name": "HDFC Liquid Fund", "category": "Debt",
            "risk": "Low", "aum": 5.2e10, "returns": {"oneYear": 6.8},
            "launchDate": "2001-10-17",
        },
        {
            "id": 3, "name": "SBI Small Cap Fund", "category": "Equity",
            "risk": "Very High", "aum": 1.9e10, "returns": {"oneYear": 22.5},
            "launchDate": "2009-09-09",
        },
        {
            "id": 4, "name": "ICICI Balanced Advantage", "category": "Hybrid",
            "risk": "Moderate", "aum": 4.1e10, "returns": {"oneYear": 11.1},
            "launchDate": "2006-12-30",
        },
        {
            "id": 5, "name": "Nippon Gold ETF", "category": "Commodity",
            "risk": "High", "aum": 8.0e9, "returns": {},
            "launchDate": "2007-03-08",
        },
    ]


@pytest.fixture
def audit_logs():
    return [
        {"id": "L1", "action": "login", "userName": "Asha Verma", "timestamp": "2025-06-10T09:30:00", "details": "Login from Chrome"},
        {"id": "L2", "action": "kyc_update", "userName": "Ravi Kumar", "timestamp": "2025-06-12T14:05:00", "details": "PAN updated"},
        {"id": "L3", "action": "login", "userName": "Ravi Kumar", "timestamp": "2025-05-28T18:45:00", "details": "Login from Safari"},
        {"id": "L4", "action": "logout", "userName": "Asha Verma", "timestamp": "2025-06-14T20:00:00", "details": "Session ended"},
    ]
