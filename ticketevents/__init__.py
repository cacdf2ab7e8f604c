"""Event and category management HTTP service backed by DynamoDB and SQS."""

__version__ = "0.1.0"