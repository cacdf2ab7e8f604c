"""Event operations on top of the event store."""

from __future__ import annotations

import uuid

from .db import DynamoClient
from .model import NIL_UUID, ZERO_TIME, CreateEventRequest, Event, EventStatus


class EventService:
    """Creates, reads, updates and deletes events."""

    def __init__(self, dynamo_db: DynamoClient) -> None:
        self._db = dynamo_db

    def create_event(self, req: CreateEventRequest) -> Event:
        """Store a new draft event built from ``req`` and return it."""
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
        )
        self._db.save_event(event)
        return event

    def get_event(self, event_id: str) -> Event:
        return self._db.get_event_by_id(event_id)

    def list_events(self, category_id: str, limit: int) -> list[Event]:
        return self._db.get_events(category_id, limit)

    def update_event(self, event_id: str, updated_event: Event) -> Event:
        """Copy the non-empty fields of ``updated_event`` onto the stored event."""
        existing = self._db.get_event_by_id(event_id)
        if updated_event.name:
            existing.name = updated_event.name
        if updated_event.description:
            existing.description = updated_event.description
        if updated_event.category_id != NIL_UUID:
            existing.category_id = updated_event.category_id
        if updated_event.location:
            existing.location = updated_event.location
        if updated_event.date != ZERO_TIME:
            existing.date = updated_event.date
        if updated_event.capacity > 0:
            existing.capacity = updated_event.capacity
        if updated_event.price > 0:
            existing.price = updated_event.price
        if updated_event.status:
            existing.status = updated_event.status
        if updated_event.image_url:
            existing.image_url = updated_event.image_url
        self._db.save_event(existing)
        return existing

    def delete_event(self, event_id: str) -> None:
        self._db.delete_event(event_id)

    def get_event_with_stats(self, event_id: str) -> Event:
        """Return the event; ticket statistics need a booking service and are not added."""
        return self.get_event(event_id)