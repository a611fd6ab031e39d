"""
Transaction form schemas: filters, manual entry, bulk upload, statement
import, reversal, correction, export and notes.
"""
from typing import Any, Dict, Optional

from fundkit.coercion import is_blank
from fundkit.config.constants import (
    BANK_ACCOUNT_TRANSACTION_TYPES,
    MAX_FILTER_RANGE_DAYS,
    PAYMENT_TRANSACTION_TYPES,
    UNIT_BASED_TRANSACTION_TYPES,
)
from fundkit.validation.rules import (
    FormContext,
    FormSchema,
    accepted,
    field_equals,
    field_in,
    is_list,
    list_size,
    max_length,
    min_length,
    non_negative,
    not_above_field,
    not_after_field,
    not_in_future,
    positive,
    required,
    required_if,
    valid_date,
    when,
    within_days_of_field,
)

_fund = [required("Please select a fund")]
_start_before_end = not_after_field("endDate", "Start date cannot be after end date")
_detailed_reason = min_length(10, "Please provide a detailed reason (minimum 10 characters)")


def _manual_file_and_format(value: Any, context: FormContext) -> Optional[str]:
    if context.get("source") == "manual" and (is_blank(value) or is_blank(context.get("fileFormat"))):
        return "File and format are required for manual import"
    return None


def _custom_range_complete(value: Any, context: FormContext) -> Optional[str]:
    if is_blank(value) or is_blank(context.get("endDate")):
        return "Custom date range requires both start and end dates"
    return None


TRANSACTION_FILTER = FormSchema.define("transaction_filter", {
    "startDate": [valid_date("Invalid start date"), _start_before_end],
    "endDate": [
        valid_date("Invalid end date"),
        within_days_of_field("startDate", MAX_FILTER_RANGE_DAYS, "Date range cannot exceed 1 year"),
    ],
    "minAmount": [
        non_negative("Minimum amount must be a non-negative number"),
        not_above_field("maxAmount", "Minimum amount cannot be greater than maximum amount"),
    ],
    "maxAmount": [non_negative("Maximum amount must be a non-negative number")],
    "status": [is_list("Invalid status selection")],
    "type": [is_list("Invalid type selection")],
})

MANUAL_TRANSACTION = FormSchema.define("manual_transaction", {
    "type": [required("Transaction type is required")],
    "fundId": _fund,
    "date": [
        required("Transaction date is required"),
        valid_date("Invalid date"),
        not_in_future("Transaction date cannot be in the future"),
    ],
    "amount": [
        required("Amount is required"),
        positive("Amount must be a positive number"),
    ],
    "units": [
        when(
            field_in("type", UNIT_BASED_TRANSACTION_TYPES),
            required("Number of units is required"),
            positive("Units must be a positive number"),
        ),
    ],
    "nav": [positive("NAV must be a positive number")],
    "paymentMethod": [
        required_if(field_in("type", PAYMENT_TRANSACTION_TYPES), "Payment method is required"),
    ],
    "bankAccountId": [
        required_if(field_in("type", BANK_ACCOUNT_TRANSACTION_TYPES), "Bank account is required"),
    ],
    "description": [
        required("Description is required"),
        min_length(5, "Description must be at least 5 characters"),
    ],
    "referenceNumber": [max_length(50, "Reference number is too long (max 50 characters)")],
    "remarks": [max_length(500, "Remarks are too long (max 500 characters)")],
})

BULK_TRANSACTION_UPLOAD = FormSchema.define("bulk_transaction_upload", {
    "file": [required("Please select a file to upload")],
    "transactionType": [required("Please select transaction type")],
    "fileFormat": [required("Please select file format")],
    "confirmFormat": [accepted("Please confirm the file format is correct")],
})

TRANSACTION_IMPORT = FormSchema.define("transaction_import", {
    "source": [required("Import source is required")],
    "camsFile": [required_if(field_equals("source", "cams"), "CAMS statement file is required")],
    "karvyFile": [required_if(field_equals("source", "karvy"), "Karvy statement file is required")],
    "file": [_manual_file_and_format],
    "startDate": [
        required("Start date is required"),
        valid_date("Invalid start date"),
        _start_before_end,
    ],
    "endDate": [
        required("End date is required"),
        valid_date("Invalid end date"),
    ],
    "confirmImport": [accepted("Please confirm the import settings")],
})

TRANSACTION_REVERSAL = FormSchema.define("transaction_reversal", {
    "transactionId": [required("Transaction ID is required")],
    "reason": [required("Reversal reason is required"), _detailed_reason],
    "effectiveDate": [
        required("Effective date is required"),
        valid_date("Invalid effective date"),
    ],
    "confirmReversal": [accepted("Please confirm the reversal")],
})

TRANSACTION_CORRECTION = FormSchema.define("transaction_correction", {
    "transactionId": [required("Transaction ID is required")],
    "correctionType": [required("Correction type is required")],
    "correctedAmount": [
        when(
            field_equals("correctionType", "amount"),
            required("Corrected amount is required"),
            positive("Corrected amount must be a positive number"),
        ),
    ],
    "correctedDate": [
        when(
            field_equals("correctionType", "date"),
            required("Corrected date is required"),
            valid_date("Invalid corrected date"),
        ),
    ],
    "correctedUnits": [
        when(
            field_equals("correctionType", "units"),
            required("Corrected units are required"),
            positive("Corrected units must be a positive number"),
        ),
    ],
    "reason": [required("Correction reason is required"), _detailed_reason],
    "confirmCorrection": [accepted("Please confirm the correction")],
})

TRANSACTION_EXPORT = FormSchema.define("transaction_export", {
    "format": [required("Export format is required")],
    "includeHeaders": [required("Please specify if headers should be included")],
    "startDate": [when(field_equals("dateRange", "custom"), _custom_range_complete, _start_before_end)],
    "columns": [list_size(1, None, "Please select at least one column to export")],
})

TRANSACTION_NOTE = FormSchema.define("transaction_note", {
    "note": [
        required("Note is required"),
        min_length(5, "Note must be at least 5 characters"),
        max_length(1000, "Note is too long (maximum 1000 characters)"),
    ],
    "category": [max_length(50, "Category is too long (maximum 50 characters)")],
})


TRANSACTION_SCHEMAS: Dict[str, FormSchema] = {
    schema.name: schema
    for schema in (
        TRANSACTION_FILTER,
        MANUAL_TRANSACTION,
        BULK_TRANSACTION_UPLOAD,
        TRANSACTION_IMPORT,
        TRANSACTION_REVERSAL,
        TRANSACTION_CORRECTION,
        TRANSACTION_EXPORT,
        TRANSACTION_NOTE,
    )
}
