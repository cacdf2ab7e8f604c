"""HTTP handlers for events and categories."""

from __future__ import annotations

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from flask import Flask, Response, abort, jsonify, request

from .awsconfig import AWSError
from .db import DynamoClient, EventNotFoundError, StorageError
from .messaging import QueueError, SQSClient
from .model import (
    NIL_UUID,
    ZERO_TIME,
    Category,
    CreateCategoryRequest,
    CreateEventRequest,
    Event,
    EventStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

_FAILURES = (StorageError, AWSError)
_INT = re.compile(r"[+-]?\d+")

T = TypeVar("T")


def _respond(status: int, body: dict[str, Any]) -> Response:
    response = jsonify(body)
    response.status_code = status
    return response


def _error(status: int, message: str, details: Exception | None = None) -> Response:
    body: dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = str(details)
    return _respond(status, body)


def _bind(factory: Callable[[Any], T], message: str) -> T:
    """Decode the JSON body with ``factory`` or abort with a 400 response."""
    raw = request.get_data()
    try:
        if not raw.strip():
            raise ValueError("EOF")
        return factory(json.loads(raw))
    except ValueError as exc:
        abort(_error(400, message, exc))


def _parse_limit(text: str) -> int:
    if _INT.fullmatch(text) and int(text) > 0:
        return int(text)
    return DEFAULT_LIMIT


def _require_id(event_id: str) -> None:
    if not event_id:
        abort(_error(400, "ID de evento requerido"))


class EventHandler:
    """Serves the event endpoints."""

    def __init__(self, sqs: SQSClient, db: DynamoClient) -> None:
        self.sqs = sqs
        self.db = db

    def _fetch(self, event_id: str, failure: str) -> Event:
        try:
            return self.db.get_event_by_id(event_id)
        except _FAILURES as exc:
            if isinstance(exc, EventNotFoundError) or "not found" in str(exc):
                abort(_error(404, "Evento no encontrado"))
            abort(_error(500, failure, exc))

    def list_events(self) -> Response:
        category_id = request.args.get("category_id", "")
        limit = _parse_limit(request.args.get("limit", ""))
        try:
            events = self.db.get_events(category_id, limit)
        except _FAILURES as exc:
            return _error(500, "Error obteniendo eventos", exc)
        # An empty listing is reported as null rather than an empty array.
        listed = [event.to_dict() for event in events] or None
        return _respond(200, {"events": listed, "count": len(events), "limit": limit})

    def get_event(self, event_id: str) -> Response:
        _require_id(event_id)
        event = self._fetch(event_id, "Error obteniendo evento")
        return _respond(200, {"event": event.to_dict()})

    def create_event(self) -> Response:
        req = _bind(CreateEventRequest.from_dict, "Datos de evento inválidos")
        now = datetime.now(timezone.utc)
        event = Event(
            id=uuid.uuid4(),
            name=req.name,
            description=req.description,
            category_id=req.category_id,
            location=req.location,
            date=req.date,
            capacity=req.capacity,
            price=req.price,
            status=EventStatus.DRAFT.value,
            image_url=req.image_url,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.save_event(event)
        except _FAILURES as exc:
            return _error(500, "Error creando evento", exc)
        try:
            self.sqs.send_message(f"Nuevo evento creado: {event.name}")
        except QueueError as exc:
            logger.warning("%s", exc)
        return _respond(201, {"message": "Evento creado con éxito", "event": event.to_dict()})

    def update_event(self, event_id: str) -> Response:
        _require_id(event_id)
        existing = self._fetch(event_id, "Error obteniendo evento")
        req = _bind(CreateEventRequest.from_dict, "Datos de actualización inválidos")
        if req.name:
            existing.name = req.name
        if req.description:
            existing.description = req.description
        if req.category_id != NIL_UUID:
            existing.category_id = req.category_id
        if req.location:
            existing.location = req.location
        if req.date != ZERO_TIME:
            existing.date = req.date
        if req.capacity > 0:
            existing.capacity = req.capacity
        if req.price > 0:
            existing.price = req.price
        if req.image_url:
            existing.image_url = req.image_url
        existing.updated_at = datetime.now(timezone.utc)
        try:
            self.db.save_event(existing)
        except _FAILURES as exc:
            return _error(500, "Error actualizando evento", exc)
        return _respond(200, {"message": "Evento actualizado con éxito", "event": existing.to_dict()})

    def delete_event(self, event_id: str) -> Response:
        _require_id(event_id)
        self._fetch(event_id, "Error verificando evento")
        try:
            self.db.delete_event(event_id)
        except _FAILURES as exc:
            return _error(500, "Error eliminando evento", exc)
        return _respond(200, {"message": "Evento eliminado con éxito"})


class CategoryHandler:
    """Serves the category endpoint."""

    def __init__(self, db: DynamoClient) -> None:
        self.db = db

    def create_category(self) -> Response:
        req = _bind(CreateCategoryRequest.from_dict, "Datos de categoría inválidos")
        now = datetime.now(timezone.utc)
        category = Category(
            id=uuid.uuid4(),
            name=req.name,
            description=req.description,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.save_category(category)
        except _FAILURES as exc:
            return _error(500, "Error creando categoría", exc)
        return _respond(201, {"message": "Categoría creada con éxito", "category": category.to_dict()})


def create_app(sqs: SQSClient, db: DynamoClient) -> Flask:
    """Build the web application with all routes under ``/api``."""
    app = Flask(__name__)
    app.json.ensure_ascii = False
    events = EventHandler(sqs, db)
    categories = CategoryHandler(db)
    app.add_url_rule("/api/events", "list_events", events.list_events, methods=["GET"])
    app.add_url_rule("/api/events/<event_id>", "get_event", events.get_event, methods=["GET"])
    app.add_url_rule("/api/events", "create_event", events.create_event, methods=["POST"])
    app.add_url_rule("/api/events/<event_id>", "update_event", events.update_event, methods=["PUT"])
    app.add_url_rule("/api/events/<event_id>", "delete_event", events.delete_event, methods=["DELETE"])
    app.add_url_rule("/api/categories", "create_category", categories.create_category, methods=["POST"])
    return app