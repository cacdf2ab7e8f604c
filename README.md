# ticketevents

A small HTTP service for managing events and their categories. Events and
categories are stored in the DynamoDB tables `events` and `categories`. Each
time an event is created, a text notification (`Nuevo evento creado: <name>`)
is sent to an SQS queue. The service talks to a local AWS endpoint at
`http://localhost:4566` in region `us-east-1`, signing its requests with
Signature Version 4. It uses the queue
`http://localhost:4566/000000000000/event-queue`.

Credentials come from the environment variables `AWS_ACCESS_KEY_ID`,
`AWS_SECRET_ACCESS_KEY` and `AWS_SESSION_TOKEN`. The key variables fall back to
the value `placeholder` when they are not set.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Prerequisites

The endpoint on port 4566 must already provide:

- a DynamoDB table `events` with string hash key `id`,
- a DynamoDB table `categories` with string hash key `id`,
- an SQS queue named `event-queue`.

## Running the server

```
ticketevents-server [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0`, port `8080`. It exposes these endpoints:

| Method | Path                | Description                                  |
|--------|---------------------|----------------------------------------------|
| GET    | `/api/events`       | List events (`category_id`, `limit` query)   |
| GET    | `/api/events/<id>`  | Fetch one event                              |
| POST   | `/api/events`       | Create an event (status starts as `draft`)   |
| PUT    | `/api/events/<id>`  | Update the non-empty fields of an event      |
| DELETE | `/api/events/<id>`  | Delete an event                              |
| POST   | `/api/categories`   | Create a category                            |

Details of each endpoint:

- **Listing events.** `limit` defaults to 10. Values that are not positive
  integers are ignored. The listing is a single table scan with that limit,
  filtered by `category_id` when one is given. The response holds `events`,
  `count` and `limit`. `events` is `null` when nothing matches.
- **Creating and updating events.** Both need a JSON body with `name`,
  `description`, `category_id` (a UUID), `location`, `date` (RFC 3339),
  `capacity` and `price`. All of these must be non-empty or non-zero.
  `image_url` is optional.
- **Updating events.** An update copies only non-empty fields, and only
  positive `capacity` and `price`, onto the stored event.
- **Error responses.**
  - A malformed body gives `400`.
  - An unknown event ID gives `404`.
  - A storage failure gives `500` with the error in `details`.
- **Queue notifications.** If sending the notification fails, a warning is
  logged. The event is still reported as created.

Creating an event:

```
curl -X POST http://localhost:8080/api/events \
  -H 'Content-Type: application/json' \
  -d '{"name":"Nuevo Evento","description":"Descripción del evento",
       "category_id":"550e8400-e29b-41d4-a716-446655440001",
       "location":"Ubicación","date":"2024-08-15T19:00:00Z",
       "capacity":100,"price":25.00}'
```

Creating a category:

```
curl -X POST http://localhost:8080/api/categories \
  -H 'Content-Type: application/json' \
  -d '{"name":"Arte","description":"Eventos de arte y exposiciones"}'
```

## Loading sample data

```
ticketevents-seed
```

This command writes five categories (Música, Teatro, Deportes, Cine,
Tecnología) and five published events into the tables. All dates are relative
to the current time. A failed insert is logged and the other items are still
tried. Afterwards the command prints a summary and example requests to try
against the running server.

## Using it as a library

- `ticketevents.app.build_app(config)` returns the Flask application wired to
  DynamoDB and SQS clients built from an `AWSConfig`. Without a config it uses
  `ticketevents.awsconfig.load_aws_config()`.
- `ticketevents.handlers.create_app(sqs, db)` builds the application around
  any `ticketevents.messaging.SQSClient` and `ticketevents.db.DynamoClient`.
- `ticketevents.service.EventService` offers the event operations without HTTP.
- `ticketevents.messaging.SQSClient` can also send and receive structured
  `EventMessage` records (`send_event_message`, `receive_event_messages`).
- `ticketevents.awsconfig.sign_request` and `AWSJsonClient` provide the request
  signing and the JSON-protocol calls that the clients use.

## What it does not do

- It does not create the tables or the queue.
- There are no endpoints to list, fetch, update or delete categories.
- Nothing in the package consumes the queue's notifications.
- `EventService.get_event_with_stats` returns the event without any ticket
  statistics.
- The endpoint address, region and queue URL are fixed. The only way to change
  the endpoint is to pass your own `AWSConfig` to `build_app`.