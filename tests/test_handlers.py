import uuid
from datetime import datetime, timezone

import pytest

from ticketevents.awsconfig import AWSError
from ticketevents.db import DynamoClient
from ticketevents.handlers import create_app
from ticketevents.messaging import SQSClient
from ticketevents.model import Event

SEEDED_ID = "550e8400-e29b-41d4-a716-446655440101"
CATEGORY = "550e8400-e29b-41d4-a716-446655440001"
OTHER_CATEGORY = "550e8400-e29b-41d4-a716-446655440002"

NEW_EVENT = {
    "name": "Nuevo Evento",
    "description": "Descripción del evento",
    "category_id": CATEGORY,
    "location": "Ubicación",
    "date": "2024-08-15T19:00:00Z",
    "capacity": 100,
    "price": 25.00,
}


class FakeAWS:
    def __init__(self):
        self.tables = {"events": {}, "categories": {}}
        self.sent = []
        self.fail = {}

    def call(self, operation, payload):
        if operation in self.fail:
            raise self.fail[operation]
        if operation == "SendMessage":
            self.sent.append(payload["MessageBody"])
            return {"MessageId": "1"}
        table = self.tables[payload["TableName"]]
        if operation == "PutItem":
            table[payload["Item"]["id"]["S"]] = payload["Item"]
            return {}
        if operation == "GetItem":
            item = table.get(payload["Key"]["id"]["S"])
            return {"Item": item} if item else {}
        if operation == "DeleteItem":
            table.pop(payload["Key"]["id"]["S"], None)
            return {}
        if operation == "Scan":
            items = list(table.values())[: payload["Limit"]]
            values = payload.get("ExpressionAttributeValues")
            if values:
                wanted = values[":category_id"]["S"]
                items = [i for i in items if i["category_id"]["S"] == wanted]
            return {"Items": items}
        raise AssertionError(operation)


@pytest.fixture
def fake():
    return FakeAWS()


@pytest.fixture
def dynamo(fake):
    return DynamoClient(fake)


@pytest.fixture
def seeded(dynamo):
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    event = Event(
        id=uuid.UUID(SEEDED_ID),
        name="Concierto de Rock en el Parque",
        description="Un increíble concierto de rock al aire libre",
        category_id=uuid.UUID(CATEGORY),
        location="Parque Central",
        date=datetime(2024, 8, 15, 19, tzinfo=timezone.utc),
        capacity=5000,
        price=75.0,
        status="published",
        image_url="https://example.com/images/rock-concert.jpg",
        created_at=stamp,
        updated_at=stamp,
    )
    dynamo.save_event(event)
    return event


@pytest.fixture
def client(fake, dynamo):
    app = create_app(SQSClient(fake, "queue-url"), dynamo)
    return app.test_client()


def test_create_event(client, fake):
    response = client.post("/api/events", json=NEW_EVENT)
    assert response.status_code == 201
    body = response.get_json()
    assert body["message"] == "Evento creado con éxito"
    assert body["event"]["status"] == "draft"
    assert body["event"]["name"] == NEW_EVENT["name"]
    assert body["event"]["id"] in fake.tables["events"]
    assert fake.sent == ["Nuevo evento creado: Nuevo Evento"]


def test_create_event_missing_field(client, fake):
    payload = {k: v for k, v in NEW_EVENT.items() if k != "location"}
    response = client.post("/api/events", json=payload)
    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "Datos de evento inválidos"
    assert "Location" in body["details"]
    assert fake.tables["events"] == {}


def test_create_event_invalid_json(client):
    response = client.post("/api/events", data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.get_json()["error"] == "Datos de evento inválidos"


def test_create_event_empty_body(client):
    response = client.post("/api/events", data="", content_type="application/json")
    assert response.status_code == 400
    assert response.get_json()["details"] == "EOF"


def test_create_event_save_failure(client, fake):
    fake.fail["PutItem"] = AWSError("RequestCanceled", "down")
    response = client.post("/api/events", json=NEW_EVENT)
    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "Error creando evento"
    assert "LocalStack" in body["details"]


def test_create_event_queue_failure_still_created(client, fake):
    fake.fail["SendMessage"] = AWSError("QueueDoesNotExist", "gone")
    response = client.post("/api/events", json=NEW_EVENT)
    assert response.status_code == 201
    assert len(fake.tables["events"]) == 1


def test_get_event(client, seeded):
    response = client.get(f"/api/events/{SEEDED_ID}")
    assert response.status_code == 200
    assert response.get_json()["event"] == seeded.to_dict()


def test_get_event_not_found(client):
    response = client.get(f"/api/events/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Evento no encontrado"}


def test_get_event_storage_failure(client, fake):
    fake.fail["GetItem"] = AWSError("InternalFailure", "boom")
    response = client.get(f"/api/events/{SEEDED_ID}")
    assert response.status_code == 500
    assert response.get_json()["error"] == "Error obteniendo evento"


def test_list_events_default_limit(client, seeded):
    body = client.get("/api/events").get_json()
    assert body["limit"] == 10
    assert body["count"] == 1
    assert body["events"] == [seeded.to_dict()]


def test_list_events_bad_limit_uses_default(client, seeded):
    assert client.get("/api/events?limit=abc").get_json()["limit"] == 10
    assert client.get("/api/events?limit=-3").get_json()["limit"] == 10


def test_list_events_limit_and_filter(client, seeded):
    client.post("/api/events", json=dict(NEW_EVENT, category_id=OTHER_CATEGORY))
    client.post("/api/events", json=NEW_EVENT)
    limited = client.get("/api/events?limit=2").get_json()
    assert limited["limit"] == 2
    assert limited["count"] == len(limited["events"]) <= 2
    filtered = client.get(f"/api/events?category_id={OTHER_CATEGORY}").get_json()
    assert [e["category_id"] for e in filtered["events"]] == [OTHER_CATEGORY]


def test_list_events_empty_is_null(client):
    body = client.get("/api/events").get_json()
    assert body["events"] is None
    assert body["count"] == 0


def test_list_events_invalid_category(client):
    response = client.get("/api/events?category_id=nope")
    assert response.status_code == 500
    assert response.get_json()["error"] == "Error obteniendo eventos"


def test_update_event(client, seeded):
    payload = dict(NEW_EVENT, name="Hamlet - Obra de Teatro Clásica")
    response = client.put(f"/api/events/{SEEDED_ID}", json=payload)
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Evento actualizado con éxito"
    assert body["event"]["name"] == payload["name"]
    assert body["event"]["status"] == "published"
    assert body["event"]["created_at"] == seeded.to_dict()["created_at"]
    assert body["event"]["updated_at"] != seeded.to_dict()["updated_at"]
    stored = client.get(f"/api/events/{SEEDED_ID}").get_json()["event"]
    assert stored["name"] == payload["name"]


def test_update_event_not_found(client):
    response = client.put(f"/api/events/{uuid.uuid4()}", json=NEW_EVENT)
    assert response.status_code == 404


def test_update_event_bad_body(client, seeded):
    response = client.put(f"/api/events/{SEEDED_ID}", json={"name": "x"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Datos de actualización inválidos"


def test_delete_event(client, seeded):
    response = client.delete(f"/api/events/{SEEDED_ID}")
    assert response.status_code == 200
    assert response.get_json() == {"message": "Evento eliminado con éxito"}
    assert client.get(f"/api/events/{SEEDED_ID}").status_code == 404


def test_delete_event_not_found(client):
    response = client.delete(f"/api/events/{uuid.uuid4()}")
    assert response.status_code == 404


def test_delete_event_lookup_failure(client, fake, seeded):
    fake.fail["GetItem"] = AWSError("InternalFailure", "boom")
    response = client.delete(f"/api/events/{SEEDED_ID}")
    assert response.status_code == 500
    assert response.get_json()["error"] == "Error verificando evento"


def test_create_category(client, fake):
    payload = {"name": "Arte", "description": "Eventos de arte y exposiciones"}
    response = client.post("/api/categories", json=payload)
    assert response.status_code == 201
    body = response.get_json()
    assert body["message"] == "Categoría creada con éxito"
    assert body["category"]["name"] == "Arte"
    assert fake.tables["categories"][body["category"]["id"]]["name"] == {"S": "Arte"}


def test_create_category_missing_description(client):
    response = client.post("/api/categories", json={"name": "Arte"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Datos de categoría inválidos"


def test_create_category_failure(client, fake):
    fake.fail["PutItem"] = AWSError("ResourceNotFoundException", "missing")
    response = client.post("/api/categories", json={"name": "Arte", "description": "d"})
    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "Error creando categoría"
    assert "categories" in body["details"]