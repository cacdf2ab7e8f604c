"""Load sample categories and events into the DynamoDB tables."""

from __future__ import annotations

import argparse
import calendar
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from .awsconfig import AWSError, AWSJsonClient, load_aws_config
from .db import category_to_item, event_to_item
from .model import Category, Event, EventStatus

logger = logging.getLogger(__name__)

CATEGORY_IDS = {
    "cat-musica": uuid.UUID("550e8400-e29b-41d4-a716-446655440001"),
    "cat-teatro": uuid.UUID("550e8400-e29b-41d4-a716-446655440002"),
    "cat-deportes": uuid.UUID("550e8400-e29b-41d4-a716-446655440003"),
    "cat-cine": uuid.UUID("550e8400-e29b-41d4-a716-446655440004"),
    "cat-tecnologia": uuid.UUID("550e8400-e29b-41d4-a716-446655440005"),
}

_INSTRUCTIONS = """
🧪 Pruebas que puedes realizar:
1. Listar todos los eventos:
   curl -X GET http://localhost:8080/api/events

2. Filtrar por categoría:
   curl -X GET 'http://localhost:8080/api/events?category_id=550e8400-e29b-41d4-a716-446655440001'

3. Obtener un evento específico:
   curl -X GET http://localhost:8080/api/events/550e8400-e29b-41d4-a716-446655440101

4. Crear una nueva categoría:
   curl -X POST http://localhost:8080/api/categories \\
     -H 'Content-Type: application/json' \\
     -d '{"name":"Arte","description":"Eventos de arte y exposiciones"}'

5. Crear un nuevo evento:
   curl -X POST http://localhost:8080/api/events \\
     -H 'Content-Type: application/json' \\
     -d '{"name":"Nuevo Evento","description":"Descripción del evento","category_id":"550e8400-e29b-41d4-a716-446655440001","location":"Ubicación","date":"2024-08-15T19:00:00Z","capacity":100,"price":25.00}'"""


class _Caller(Protocol):
    def call(self, operation: str, payload: dict[str, Any]) -> dict[str, Any]: ...


def _now(now: datetime | None) -> datetime:
    return datetime.now(timezone.utc) if now is None else now


def _add_date(value: datetime, months: int = 0, days: int = 0) -> datetime:
    """Add months and days, letting day overflow roll into the next month."""
    total = value.year * 12 + (value.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    overflow = value.day - 1
    first = value.replace(year=year, month=month, day=1)
    return first + timedelta(days=overflow + days)


def _days_ago(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)


def sample_categories(now: datetime | None = None) -> list[Category]:
    """Return the five sample categories, stamped relative to ``now``."""
    now = _now(now)
    rows = [
        ("cat-musica", "Música", "Eventos musicales, conciertos y festivales", 7),
        ("cat-teatro", "Teatro", "Obras de teatro, musicales y presentaciones escénicas", 6),
        ("cat-deportes", "Deportes", "Eventos deportivos, partidos y competiciones", 5),
        ("cat-cine", "Cine", "Estrenos de películas, festivales de cine y proyecciones especiales", 4),
        ("cat-tecnologia", "Tecnología", "Conferencias tecnológicas, hackathons y eventos de innovación", 3),
    ]
    return [
        Category(
            id=CATEGORY_IDS[key],
            name=name,
            description=description,
            created_at=_days_ago(now, age),
            updated_at=_days_ago(now, age),
        )
        for key, name, description, age in rows
    ]


def sample_events(now: datetime | None = None) -> list[Event]:
    """Return the five sample published events, dated relative to ``now``."""
    now = _now(now)
    rows = [
        (
            "550e8400-e29b-41d4-a716-446655440101",
            "Concierto de Rock en el Parque",
            "Un increíble concierto de rock al aire libre con las mejores bandas del momento",
            "cat-musica", "Parque Central", (1, 15), 5000, 75.00,
            "https://example.com/images/rock-concert.jpg", 30,
        ),
        (
            "550e8400-e29b-41d4-a716-446655440102",
            "Hamlet - Obra de Teatro Clásica",
            "La famosa obra de Shakespeare presentada por la compañía nacional de teatro",
            "cat-teatro", "Teatro Nacional", (0, 10), 800, 45.00,
            "https://example.com/images/hamlet.jpg", 20,
        ),
        (
            "550e8400-e29b-41d4-a716-446655440103",
            "Final de Liga - Fútbol",
            "La gran final de la liga local entre los dos mejores equipos",
            "cat-deportes", "Estadio Municipal", (0, 5), 25000, 30.00,
            "https://example.com/images/football-final.jpg", 15,
        ),
        (
            "550e8400-e29b-41d4-a716-446655440104",
            "Estreno Mundial - Nueva Película",
            "El estreno mundial de la nueva película de acción y aventura",
            "cat-cine", "Cine Multiplex", (0, 3), 300, 12.00,
            "https://example.com/images/movie-premiere.jpg", 10,
        ),
        (
            "550e8400-e29b-41d4-a716-446655440105",
            "Conferencia de Tecnología 2024",
            "La conferencia más importante del año sobre las últimas tendencias en tecnología",
            "cat-tecnologia", "Centro de Convenciones", (2, 0), 1000, 150.00,
            "https://example.com/images/tech-conference.jpg", 5,
        ),
    ]
    return [
        Event(
            id=uuid.UUID(event_id),
            name=name,
            description=description,
            category_id=CATEGORY_IDS[category],
            location=location,
            date=_add_date(now, months=offset[0], days=offset[1]),
            capacity=capacity,
            price=price,
            status=EventStatus.PUBLISHED.value,
            image_url=image_url,
            created_at=_days_ago(now, age),
            updated_at=_days_ago(now, age),
        )
        for event_id, name, description, category, location, offset, capacity, price, image_url, age in rows
    ]


def seed(client: _Caller, now: datetime | None = None) -> list[str]:
    """Insert the sample data and return the names of the items stored.

    A failed insert is logged and the remaining items are still tried.
    """
    categories = sample_categories(now)
    events = sample_events(now)
    stored: list[str] = []

    print("🌱 Cargando datos de prueba en DynamoDB...")
    print(f"📊 Insertando {len(categories)} categorías...")
    for number, category in enumerate(categories, start=1):
        try:
            client.call("PutItem", {"TableName": "categories", "Item": category_to_item(category)})
        except AWSError as exc:
            logger.error("Error insertando categoría %d: %s", number, exc)
            continue
        stored.append(category.name)
        print(f"✅ Categoría '{category.name}' insertada correctamente")

    print(f"\n📊 Insertando {len(events)} eventos...")
    for number, event in enumerate(events, start=1):
        try:
            client.call("PutItem", {"TableName": "events", "Item": event_to_item(event)})
        except AWSError as exc:
            logger.error("Error insertando evento %d: %s", number, exc)
            continue
        stored.append(event.name)
        print(f"✅ Evento '{event.name}' insertado correctamente")
    return stored


def main(argv: list[str] | None = None) -> int:
    """Load the sample data into the local DynamoDB endpoint."""
    parser = argparse.ArgumentParser(description="Load sample categories and events.")
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    client = AWSJsonClient(load_aws_config(), "dynamodb", "DynamoDB_20120810", "1.0")
    seed(client)

    events = sample_events()
    print("\n🎉 Datos de prueba cargados exitosamente!")
    print("\n📋 Resumen de datos cargados:")
    print(f"   • {len(sample_categories())} categorías de eventos")
    print(f"   • {len(events)} eventos de prueba:")
    for event in events:
        print(f"     - {event.name} - ${event.price:.2f}")
    print(_INSTRUCTIONS)
    return 0