from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from jsonschema import Draft7Validator

from formbuilder.config import FIELD_TYPES
from formbuilder.models import FormField, Snapshot

FIELD_UPDATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "enum": list(FIELD_TYPES)},
        "label": {"type": "string", "minLength": 1},
        "placeholder": {"type": "string"},
        "required": {"type": "boolean"},
        "options": {
            "anyOf": [
                {"type": "array", "items": {"type": "string"}},
                {"type": "null"},
            ]
        },
    },
    "additionalProperties": False,
}

FORM_UPDATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "webhook_url": {"type": "string"},
        "webhook_enabled": {"type": "boolean"},
    },
    "additionalProperties": False,
}

FIELD_CREATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"type": {"type": "string", "enum": list(FIELD_TYPES)}},
    "required": ["type"],
}

FIELDS_PAYLOAD_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "type": {"type": "string", "enum": list(FIELD_TYPES)},
            "label": {"type": "string"},
            "placeholder": {"type": ["string", "null"]},
            "required": {"type": "boolean"},
            "options": {
                "anyOf": [
                    {"type": "array", "items": {"type": "string"}},
                    {"type": "null"},
                ]
            },
            "order": {"type": "integer"},
        },
        "required": ["label"],
    },
}

SUBMISSIONS_PAYLOAD_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {"type": "object"},
}


def _error_messages(validator: Draft7Validator, data: Any) -> list[str]:
    errors = sorted(validator.iter_errors(data), key=lambda err: list(err.path))
    messages: list[str] = []
    for err in errors:
        location = ".".join(str(part) for part in err.path)
        messages.append(f"{location}: {err.message}" if location else err.message)
    return messages


def check_payload(payload: Any, schema: dict[str, Any]) -> list[str]:
    return _error_messages(Draft7Validator(schema), payload)


def is_valid_webhook_url(url: str) -> bool:
    if not url:
        return False
    parsed = urlsplit(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_snapshot(snapshot: Snapshot) -> list[str]:
    errors: list[str] = []
    if not snapshot.title.strip():
        errors.append("タイトルは必須です")
    if snapshot.webhook_enabled and not is_valid_webhook_url(snapshot.webhook_url):
        errors.append("webhook_urlが不正です")
    if not snapshot.fields:
        errors.append("最低1つのフィールドが必要です")

    seen_labels: set[str] = set()
    for index, item in enumerate(snapshot.fields, start=1):
        loc = f"{index}行目"
        label = item.label.strip()
        if not label:
            errors.append(f"{loc}: ラベルは必須です")
        elif label in seen_labels:
            errors.append(f"{loc}: ラベルが重複しています ({label})")
        else:
            seen_labels.add(label)
        if item.type not in FIELD_TYPES:
            errors.append(f"{loc}: 種類が不正です ({item.type})")
        if item.type in {"select", "radio"} and not item.options:
            errors.append(f"{loc}: 選択肢を指定してください")
    return errors


def build_property(item: FormField) -> dict[str, Any]:
    field_type = item.type
    if field_type == "email":
        prop: dict[str, Any] = {"type": "string", "format": "email"}
    elif field_type == "number":
        prop = {"type": "number"}
    elif field_type == "date":
        prop = {"type": "string", "format": "date"}
    elif field_type in {"select", "radio"}:
        prop = {"type": "string", "enum": list(item.options or [])}
    elif field_type == "checkbox":
        if item.options:
            prop = {"type": "array", "items": {"type": "string", "enum": list(item.options)}}
        else:
            prop = {"type": "boolean"}
    else:
        prop = {"type": "string"}
        if field_type == "textarea":
            prop["x-multiline"] = True

    prop["title"] = item.label
    prop["x-field-id"] = item.id
    prop["x-field-type"] = field_type
    if item.placeholder:
        prop["x-placeholder"] = item.placeholder
    return prop


def schema_from_fields(fields: list[FormField]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    field_order: list[str] = []
    for item in fields:
        key = item.label
        field_order.append(key)
        properties[key] = build_property(item)
        if item.required:
            required.append(key)
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "x-field-order": field_order,
    }
    if required:
        schema["required"] = required
    return schema


def preview_schema(snapshot: Snapshot) -> dict[str, Any]:
    schema = schema_from_fields(snapshot.fields)
    schema["title"] = snapshot.title
    if snapshot.description:
        schema["description"] = snapshot.description
    return schema


def validate_submission(snapshot: Snapshot, data: dict[str, Any]) -> list[str]:
    validator = Draft7Validator(
        schema_from_fields(snapshot.fields),
        format_checker=Draft7Validator.FORMAT_CHECKER,
    )
    return _error_messages(validator, data)


def save_payload(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "title": snapshot.title,
        "description": snapshot.description,
        "webhook_url": snapshot.webhook_url,
        "webhook_enabled": snapshot.webhook_enabled,
        "fields": [
            {
                "type": item.type,
                "label": item.label,
                "placeholder": item.placeholder or "",
                "required": item.required,
                "options": list(item.options) if item.options is not None else None,
                "order": index,
            }
            for index, item in enumerate(snapshot.fields)
        ],
    }
