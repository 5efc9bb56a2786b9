from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FormField:
    id: str
    type: str
    label: str
    placeholder: str = ""
    required: bool = False
    options: list[str] | None = None
    order: int = 0

    def clone(self) -> FormField:
        return FormField(
            id=self.id,
            type=self.type,
            label=self.label,
            placeholder=self.placeholder,
            required=self.required,
            options=list(self.options) if self.options is not None else None,
            order=self.order,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
            "order": self.order,
        }
        if self.options is not None:
            data["options"] = list(self.options)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormField:
        options = data.get("options")
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            label=str(data.get("label", "")),
            placeholder=str(data.get("placeholder") or ""),
            required=bool(data.get("required")),
            options=[str(item) for item in options] if options is not None else None,
            order=int(data.get("order", 0)),
        )


@dataclass
class Snapshot:
    """ビルダーの編集状態一式。"""

    fields: list[FormField] = field(default_factory=list)
    title: str = ""
    description: str = ""
    webhook_url: str = ""
    webhook_enabled: bool = False

    def clone(self) -> Snapshot:
        return Snapshot(
            fields=[item.clone() for item in self.fields],
            title=self.title,
            description=self.description,
            webhook_url=self.webhook_url,
            webhook_enabled=self.webhook_enabled,
        )

    def find_field(self, field_id: str) -> FormField | None:
        for item in self.fields:
            if item.id == field_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": [item.to_dict() for item in self.fields],
            "title": self.title,
            "description": self.description,
            "webhook_url": self.webhook_url,
            "webhook_enabled": self.webhook_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        return cls(
            fields=[FormField.from_dict(item) for item in data.get("fields") or []],
            title=str(data.get("title", "")),
            description=str(data.get("description") or ""),
            webhook_url=str(data.get("webhook_url") or ""),
            webhook_enabled=bool(data.get("webhook_enabled")),
        )


def blank_snapshot(title: str = "Untitled Form") -> Snapshot:
    return Snapshot(title=title)
