"""Event notifications over an SQS queue."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from .awsconfig import AWSError


class QueueError(Exception):
    """Raised when a queue operation or message decoding fails."""


class _Caller(Protocol):
    def call(self, operation: str, payload: dict[str, Any]) -> dict[str, Any]: ...


@dataclass
class EventMessage:
    event_id: str = ""
    event_name: str = ""
    action: str = ""

    def to_json(self) -> str:
        """Encode the message as compact JSON."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "EventMessage":
        """Decode a message; unknown fields are ignored, absent ones left empty."""
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise QueueError(f"invalid message body: {exc}") from exc
        if not isinstance(data, dict):
            raise QueueError("message body must be a JSON object")
        values = {}
        for name in ("event_id", "event_name", "action"):
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise QueueError(f"field {name!r} must be a string")
            values[name] = value
        return cls(**values)


class SQSClient:
    """Sends to and receives from one queue."""

    def __init__(self, client: _Caller, queue_url: str) -> None:
        self.client = client
        self.queue_url = queue_url

    def send_message(self, message: str) -> None:
        try:
            self.client.call("SendMessage", {"QueueUrl": self.queue_url, "MessageBody": message})
        except AWSError as exc:
            raise QueueError(f"error sending SQS message: {exc}") from exc

    def send_event_message(self, msg: EventMessage) -> None:
        self.send_message(msg.to_json())

    def receive_event_messages(self, max_messages: int) -> list[EventMessage]:
        """Receive up to ``max_messages``, skipping bodies that do not decode."""
        try:
            response = self.client.call(
                "ReceiveMessage",
                {"QueueUrl": self.queue_url, "MaxNumberOfMessages": max_messages, "WaitTimeSeconds": 10},
            )
        except AWSError as exc:
            raise QueueError(f"error receiving SQS messages: {exc}") from exc
        messages = []
        for raw in response.get("Messages", []):
            try:
                messages.append(EventMessage.from_json(raw.get("Body", "")))
            except QueueError:
                continue
        return messages