from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True, slots=True)
class SingleSelectValue:
    name: str


@dataclass(frozen=True, slots=True)
class TextValue:
    text: str


@dataclass(frozen=True, slots=True)
class NumberValue:
    number: float


FieldValue = Union[SingleSelectValue, TextValue, NumberValue]


@dataclass(slots=True)
class Classification:
    is_pending_payment: bool = False
    recipient: str = ""
    bounty_amount: str = ""
    bounty_symbol: str = ""


@dataclass(slots=True)
class ProjectItem:
    id: str
    title: str = ""
    url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    due_date: str = ""
    assigned_to: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    description: str = ""
    recipient: str = ""
    bounty_amount: str = ""
    bounty_symbol: str = ""
