"""Application wiring and the server command."""

from __future__ import annotations

import argparse
import logging

from flask import Flask

from .awsconfig import AWSConfig, AWSJsonClient, load_aws_config
from .db import DynamoClient
from .handlers import create_app
from .messaging import SQSClient

logger = logging.getLogger(__name__)

QUEUE_URL = "http://localhost:4566/000000000000/event-queue"


def build_app(config: AWSConfig | None = None) -> Flask:
    """Create the web application talking to the configured AWS endpoint."""
    if config is None:
        config = load_aws_config()
    sqs = SQSClient(AWSJsonClient(config, "sqs", "AmazonSQS", "1.0"), QUEUE_URL)
    dynamo = DynamoClient(AWSJsonClient(config, "dynamodb", "DynamoDB_20120810", "1.0"))
    return create_app(sqs, dynamo)


def main(argv: list[str] | None = None) -> int:
    """Run the event server."""
    parser = argparse.ArgumentParser(description="Event management HTTP server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    app = build_app(load_aws_config())
    logger.info("🚀 Iniciando servidor de eventos en puerto %d...", args.port)
    app.run(host=args.host, port=args.port)
    return 0