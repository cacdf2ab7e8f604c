"""Event and category storage in DynamoDB."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any, Protocol

from .awsconfig import AWSError
from .model import Category, Event, ValidationError, format_rfc3339, parse_rfc3339

logger = logging.getLogger(__name__)

_INT = re.compile(r"[+-]?\d+")

_CONNECTION_MESSAGE = (
    "Error de conexión con DynamoDB. Verifique que LocalStack esté ejecutándose en http://localhost:4566."
)


class StorageError(Exception):
    """Raised when the database cannot store or return data."""


class EventNotFoundError(StorageError):
    """Raised when no event has the requested ID."""


class _Caller(Protocol):
    def call(self, operation: str, payload: dict[str, Any]) -> dict[str, Any]: ...


def event_to_item(event: Event) -> dict[str, dict[str, str]]:
    """Return the DynamoDB item for an event."""
    return {
        "id": {"S": str(event.id)},
        "name": {"S": event.name},
        "description": {"S": event.description},
        "category_id": {"S": str(event.category_id)},
        "location": {"S": event.location},
        "date": {"S": format_rfc3339(event.date)},
        "capacity": {"N": str(int(event.capacity))},
        "price": {"N": f"{event.price:.2f}"},
        "status": {"S": str(getattr(event.status, "value", event.status))},
        "image_url": {"S": event.image_url},
        "created_at": {"S": format_rfc3339(event.created_at)},
        "updated_at": {"S": format_rfc3339(event.updated_at)},
    }


def category_to_item(category: Category) -> dict[str, dict[str, str]]:
    """Return the DynamoDB item for a category."""
    return {
        "id": {"S": str(category.id)},
        "name": {"S": category.name},
        "description": {"S": category.description},
        "created_at": {"S": format_rfc3339(category.created_at)},
        "updated_at": {"S": format_rfc3339(category.updated_at)},
    }


def _attr(item: dict[str, Any], key: str, kind: str) -> str | None:
    value = item.get(key)
    if isinstance(value, dict) and isinstance(value.get(kind), str):
        return value[kind]
    return None


def event_from_item(item: dict[str, Any]) -> Event:
    """Build an event from a DynamoDB item; absent or mistyped attributes keep defaults."""
    event = Event()
    for key, label in (("id", "event ID"), ("category_id", "category ID")):
        text = _attr(item, key, "S")
        if text is not None:
            try:
                setattr(event, key, uuid.UUID(text))
            except ValueError as exc:
                raise StorageError(f"invalid {label}: {exc}") from exc
    for key in ("name", "description", "location", "status", "image_url"):
        text = _attr(item, key, "S")
        if text is not None:
            setattr(event, key, text)
    for key, label in (("date", "date"), ("created_at", "created_at time"), ("updated_at", "updated_at time")):
        text = _attr(item, key, "S")
        if text is not None:
            try:
                setattr(event, key, parse_rfc3339(text))
            except ValidationError as exc:
                raise StorageError(f"invalid {label}: {exc}") from exc
    capacity = _attr(item, "capacity", "N")
    if capacity is not None:
        if not _INT.fullmatch(capacity):
            raise StorageError(f"invalid capacity: {capacity!r}")
        event.capacity = int(capacity)
    price = _attr(item, "price", "N")
    if price is not None:
        try:
            event.price = float(price)
        except ValueError as exc:
            raise StorageError(f"invalid price: {exc}") from exc
    return event


def _save_error(exc: AWSError, table: str, exists_message: str, label: str) -> StorageError:
    text = str(exc)
    if "ResourceNotFoundException" in text:
        msg = (
            f"La tabla '{table}' no existe en DynamoDB. Verifique que LocalStack esté "
            "ejecutándose y la tabla haya sido creada."
        )
    elif "RequestCanceled" in text:
        msg = _CONNECTION_MESSAGE
    elif "ConditionalCheckFailedException" in text:
        msg = exists_message
    else:
        msg = f"Error guardando {label} en DynamoDB: {text}"
    return StorageError(msg)


class DynamoClient:
    """Reads and writes the ``events`` and ``categories`` tables."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    def save_event(self, event: Event) -> None:
        logger.info("Guardando evento: ID=%s, Name=%s, CategoryID=%s", event.id, event.name, event.category_id)
        try:
            self.client.call("PutItem", {"TableName": "events", "Item": event_to_item(event)})
        except AWSError as exc:
            raise _save_error(exc, "events", "El evento ya existe en la base de datos.", "evento") from exc

    def get_event_by_id(self, event_id: str) -> Event:
        result = self.client.call("GetItem", {"TableName": "events", "Key": {"id": {"S": event_id}}})
        item = result.get("Item")
        if not item:
            raise EventNotFoundError("event not found")
        return event_from_item(item)

    def get_events(self, category_id: str, limit: int) -> list[Event]:
        payload: dict[str, Any] = {"TableName": "events", "Limit": limit}
        if category_id:
            try:
                category = uuid.UUID(category_id)
            except ValueError as exc:
                raise StorageError(f"invalid category ID format: {exc}") from exc
            payload["FilterExpression"] = "#category_id = :category_id"
            payload["ExpressionAttributeNames"] = {"#category_id": "category_id"}
            payload["ExpressionAttributeValues"] = {":category_id": {"S": str(category)}}
        result = self.client.call("Scan", payload)
        return [event_from_item(item) for item in result.get("Items", [])]

    def delete_event(self, event_id: str) -> None:
        self.client.call("DeleteItem", {"TableName": "events", "Key": {"id": {"S": event_id}}})

    def save_category(self, category: Category) -> None:
        logger.info("Guardando categoría: ID=%s, Name=%s", category.id, category.name)
        try:
            self.client.call("PutItem", {"TableName": "categories", "Item": category_to_item(category)})
        except AWSError as exc:
            raise _save_error(
                exc, "categories", "La categoría ya existe en la base de datos.", "categoría"
            ) from exc