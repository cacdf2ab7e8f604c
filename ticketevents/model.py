"""Domain records for events and categories, and request validation."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

NIL_UUID = uuid.UUID(int=0)
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


class EventStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ValidationError(ValueError):
    """Raised when request data is missing or malformed."""


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339 with second precision; naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    stamp = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    offset = value.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return stamp + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{stamp}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime."""
    if not isinstance(text, str):
        raise ValidationError(f"expected an RFC 3339 string, got {text!r}")
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValidationError(f"cannot parse {text!r} as RFC 3339")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, zone = match.group(7), match.group(8)
    micro = int((fraction[1:] + "000000")[:6]) if fraction else 0
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, mins = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or mins > 59:
            raise ValidationError(f"time zone offset out of range in {text!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=mins))
    try:
        return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError as exc:
        raise ValidationError(f"cannot parse {text!r} as RFC 3339: {exc}") from exc


@dataclass
class Event:
    id: uuid.UUID = NIL_UUID
    name: str = ""
    description: str = ""
    category_id: uuid.UUID = NIL_UUID
    location: str = ""
    date: datetime = ZERO_TIME
    capacity: int = 0
    price: float = 0.0
    status: str = ""
    image_url: str = ""
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the event."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category_id": str(self.category_id),
            "location": self.location,
            "date": format_rfc3339(self.date),
            "capacity": self.capacity,
            "price": self.price,
            "status": str(getattr(self.status, "value", self.status)),
            "image_url": self.image_url,
            "created_at": format_rfc3339(self.created_at),
            "updated_at": format_rfc3339(self.updated_at),
        }


@dataclass
class Category:
    id: uuid.UUID = NIL_UUID
    name: str = ""
    description: str = ""
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the category."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "created_at": format_rfc3339(self.created_at),
            "updated_at": format_rfc3339(self.updated_at),
        }


def _required_error(struct: str, name: str) -> ValidationError:
    return ValidationError(
        f"Key: '{struct}.{name}' Error:Field validation for '{name}' failed on the 'required' tag"
    )


def _require_mapping(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


def _get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"field {key!r} must be a string")
    return value


@dataclass
class CreateEventRequest:
    name: str
    description: str
    category_id: uuid.UUID
    location: str
    date: datetime
    capacity: int
    price: float
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CreateEventRequest":
        """Build a request from decoded JSON, enforcing required fields."""
        data = _require_mapping(data)
        raw_category = data.get("category_id")
        category_id = NIL_UUID
        if raw_category is not None:
            if not isinstance(raw_category, str):
                raise ValidationError("field 'category_id' must be a string")
            try:
                category_id = uuid.UUID(raw_category)
            except ValueError as exc:
                raise ValidationError(f"invalid UUID {raw_category!r}") from exc
        raw_date = data.get("date")
        date = ZERO_TIME if raw_date is None else parse_rfc3339(raw_date)
        capacity = data.get("capacity", 0)
        if capacity is None:
            capacity = 0
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValidationError("field 'capacity' must be an integer")
        price = data.get("price", 0.0)
        if price is None:
            price = 0.0
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValidationError("field 'price' must be a number")
        req = cls(
            name=_get_str(data, "name"),
            description=_get_str(data, "description"),
            category_id=category_id,
            location=_get_str(data, "location"),
            date=date,
            capacity=capacity,
            price=float(price),
            image_url=_get_str(data, "image_url"),
        )
        checks = [
            ("Name", req.name != ""),
            ("Description", req.description != ""),
            ("CategoryID", req.category_id != NIL_UUID),
            ("Location", req.location != ""),
            ("Date", req.date != ZERO_TIME),
            ("Capacity", req.capacity != 0),
            ("Price", req.price != 0),
        ]
        for name, ok in checks:
            if not ok:
                raise _required_error("CreateEventRequest", name)
        return req


@dataclass
class CreateCategoryRequest:
    name: str
    description: str

    @classmethod
    def from_dict(cls, data: Any) -> "CreateCategoryRequest":
        """Build a request from decoded JSON, enforcing required fields."""
        data = _require_mapping(data)
        req = cls(name=_get_str(data, "name"), description=_get_str(data, "description"))
        if not req.name:
            raise _required_error("CreateCategoryRequest", "Name")
        if not req.description:
            raise _required_error("CreateCategoryRequest", "Description")
        return req