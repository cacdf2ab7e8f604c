"""AWS endpoint configuration, SigV4 signing and a small JSON-protocol client."""

from __future__ import annotations

import hashlib
import hmac
import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote, urlsplit

import requests


@dataclass(frozen=True)
class AWSConfig:
    region: str = "us-east-1"
    endpoint_url: str = "http://localhost:4566"
    access_key_id: str = "placeholder"
    secret_access_key: str = "placeholder"
    session_token: str | None = None


class AWSError(Exception):
    """An error reported by an AWS service or by the connection to it."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


def load_aws_config() -> AWSConfig:
    """Return the local endpoint configuration, taking credentials from the environment."""
    return AWSConfig(
        access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", "placeholder"),
        secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", "placeholder"),
        session_token=os.environ.get("AWS_SESSION_TOKEN") or None,
    )


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def sign_request(
    config: AWSConfig,
    service: str,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: bytes | str,
    now: datetime,
) -> dict[str, str]:
    """Return a copy of ``headers`` with Signature Version 4 headers added."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    amz_date = now.strftime("%Y%m%dT%H%M%SZ")
    date_stamp = amz_date[:8]
    parts = urlsplit(url)

    canon = {k.lower(): " ".join(str(v).split()) for k, v in headers.items()}
    canon["host"] = parts.netloc
    canon["x-amz-date"] = amz_date
    if config.session_token:
        canon["x-amz-security-token"] = config.session_token
    names = sorted(canon)
    signed_headers = ";".join(names)
    canonical_headers = "".join(f"{name}:{canon[name]}\n" for name in names)
    query = "&".join(
        f"{quote(k, safe='-_.~')}={quote(v, safe='-_.~')}"
        for k, v in sorted(parse_qsl(parts.query, keep_blank_values=True))
    )
    payload_hash = hashlib.sha256(body).hexdigest()
    canonical_request = "\n".join(
        [method.upper(), quote(parts.path or "/", safe="/-_.~"), query,
         canonical_headers, signed_headers, payload_hash]
    )
    scope = f"{date_stamp}/{config.region}/{service}/aws4_request"
    string_to_sign = "\n".join(
        ["AWS4-HMAC-SHA256", amz_date, scope,
         hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()]
    )
    key = _hmac(("AWS4" + config.secret_access_key).encode("utf-8"), date_stamp)
    for part in (config.region, service, "aws4_request"):
        key = _hmac(key, part)
    signature = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    result = dict(headers)
    result["X-Amz-Date"] = amz_date
    if config.session_token:
        result["X-Amz-Security-Token"] = config.session_token
    result["Authorization"] = (
        f"AWS4-HMAC-SHA256 Credential={config.access_key_id}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )
    return result


class AWSJsonClient:
    """Calls operations of an AWS service that speaks the JSON protocol."""

    def __init__(self, config: AWSConfig, service: str, target_prefix: str, json_version: str = "1.0") -> None:
        self.config = config
        self.service = service
        self.target_prefix = target_prefix
        self.json_version = json_version

    def call(self, operation: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Invoke ``operation`` and return the decoded response; raise AWSError on failure."""
        url = self.config.endpoint_url.rstrip("/") + "/"
        body = json.dumps(payload).encode("utf-8")
        headers = sign_request(
            self.config,
            self.service,
            "POST",
            url,
            {
                "Content-Type": f"application/x-amz-json-{self.json_version}",
                "X-Amz-Target": f"{self.target_prefix}.{operation}",
            },
            body,
            datetime.now(timezone.utc),
        )
        try:
            response = requests.post(url, data=body, headers=headers, timeout=30)
        except requests.RequestException as exc:
            raise AWSError("RequestCanceled", str(exc)) from exc
        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}
        if response.status_code >= 400:
            code = str(data.get("__type", "")).rsplit("#", 1)[-1] if isinstance(data, dict) else ""
            message = ""
            if isinstance(data, dict):
                message = data.get("message") or data.get("Message") or ""
            raise AWSError(code or f"HTTP{response.status_code}", message or response.text)
        return data if isinstance(data, dict) else {}