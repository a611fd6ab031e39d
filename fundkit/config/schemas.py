"""
JSON Schemas for inputs that arrive as raw JSON.

QUERY_CRITERIA_SCHEMA — shape of a list-screen query (filters, sort, page)
as sent by a client. Checked before the typed QueryCriteria is built, so a
malformed request is rejected with the offending path in the message.
"""
from fundkit.config.constants import FIELD_TYPES, SORT_DIRECTIONS

QUERY_CRITERIA_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "filters": {
            "type": "object",
            "description": "field -> value; ranges as {start, end}",
        },
        "fieldTypes": {
            "type": "object",
            "additionalProperties": {"type": "string", "enum": FIELD_TYPES},
        },
        "search": {"type": ["string", "null"]},
        "searchFields": {
            "type": "array",
            "items": {"type": "string"},
        },
        "sort": {
            "type": ["object", "null"],
            "additionalProperties": False,
            "required": ["key"],
            "properties": {
                "key": {"type": "string", "minLength": 1},
                "direction": {"type": "string", "enum": SORT_DIRECTIONS},
            },
        },
        "page": {"type": "integer", "minimum": 1},
        "pageSize": {"type": "integer", "minimum": 1},
        # snake_case spellings, for criteria built in Python
        "field_types": {"$ref": "#/properties/fieldTypes"},
        "search_fields": {"$ref": "#/properties/searchFields"},
        "page_size": {"$ref": "#/properties/pageSize"},
    },
}
