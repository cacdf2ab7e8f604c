import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import responses

from ticketevents.awsconfig import AWSError
from ticketevents.db import event_from_item
from ticketevents.seed import main, sample_categories, sample_events, seed

NOW = datetime(2024, 1, 31, 12, 0, 0, tzinfo=timezone.utc)


class FakeClient:
    def __init__(self, fail_table=None):
        self.calls = []
        self.fail_table = fail_table

    def call(self, operation, payload):
        self.calls.append((operation, payload))
        if payload.get("TableName") == self.fail_table:
            raise AWSError("ResourceNotFoundException", "missing table")
        return {}


def test_categories_have_fixed_ids_and_ages():
    categories = sample_categories(NOW)
    assert [str(c.id) for c in categories][0] == "550e8400-e29b-41d4-a716-446655440001"
    assert [c.name for c in categories] == ["Música", "Teatro", "Deportes", "Cine", "Tecnología"]
    assert categories[0].created_at == NOW - timedelta(days=7)
    assert all(c.created_at == c.updated_at for c in categories)


def test_events_reference_sample_categories():
    category_ids = {c.id for c in sample_categories(NOW)}
    events = sample_events(NOW)
    assert len(events) == 5
    assert all(e.category_id in category_ids for e in events)
    assert all(e.status == "published" for e in events)
    assert str(events[0].id) == "550e8400-e29b-41d4-a716-446655440101"
    assert [e.price for e in events] == [75.0, 45.0, 30.0, 12.0, 150.0]


def test_event_dates_relative_to_now():
    events = sample_events(NOW)
    assert events[1].date == NOW + timedelta(days=10)
    assert events[2].date == NOW + timedelta(days=5)
    assert events[3].date == NOW + timedelta(days=3)
    # month arithmetic lets the day overflow into the following month
    assert events[0].date == datetime(2024, 3, 17, 12, 0, 0, tzinfo=timezone.utc)
    assert events[4].date == datetime(2024, 3, 31, 12, 0, 0, tzinfo=timezone.utc)


def test_seed_writes_all_items(capsys):
    client = FakeClient()
    stored = seed(client, NOW)
    assert len(stored) == 10
    tables = [payload["TableName"] for _, payload in client.calls]
    assert tables == ["categories"] * 5 + ["events"] * 5
    assert all(op == "PutItem" for op, _ in client.calls)
    out = capsys.readouterr().out
    assert "✅ Evento 'Final de Liga - Fútbol' insertado correctamente" in out


def test_seeded_event_items_round_trip():
    client = FakeClient()
    seed(client, NOW)
    items = [p["Item"] for _, p in client.calls if p["TableName"] == "events"]
    assert items[0]["price"] == {"N": "75.00"}
    restored = [event_from_item(item) for item in items]
    expected = sample_events(NOW)
    assert [e.id for e in restored] == [e.id for e in expected]
    assert [e.date for e in restored] == [e.date for e in expected]
    assert [e.capacity for e in restored] == [e.capacity for e in expected]


def test_seed_continues_after_failures():
    client = FakeClient(fail_table="categories")
    stored = seed(client, NOW)
    assert len(client.calls) == 10
    assert stored == [e.name for e in sample_events(NOW)]


def test_main_posts_to_local_endpoint(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "http://localhost:4566/", json={})
        assert main([]) == 0
        calls = list(rsps.calls)
    assert len(calls) == 10
    targets = {call.request.headers["X-Amz-Target"] for call in calls}
    assert targets == {"DynamoDB_20120810.PutItem"}
    first = json.loads(calls[0].request.body)
    assert uuid.UUID(first["Item"]["id"]["S"]) == sample_categories(NOW)[0].id
    out = capsys.readouterr().out
    assert "Hamlet - Obra de Teatro Clásica - $45.00" in out


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit):
        main(["--bogus"])