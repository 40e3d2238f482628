"""Event parsing and responses for API-gateway style serverless events."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from zoho_tasks.errors import ValidationError, ZohoTasksError

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE,OPTIONS",
}


def json_response(status_code: int, body: Any = None) -> dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if body is None:
        return {"statusCode": status_code, "headers": headers, "body": ""}
    headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, default=str),
    }


def error_response(error: ZohoTasksError) -> dict[str, Any]:
    return json_response(error.status_code, error.to_dict())


def method_of(event: dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        # HTTP API v2 payloads
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method") or ""
    return str(method).upper()


def query_params(event: dict[str, Any]) -> dict[str, str]:
    return event.get("queryStringParameters") or {}


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON request body; a missing body is an empty object."""
    raw = event.get("body")
    if raw in (None, ""):
        return {}
    if isinstance(raw, dict):
        return raw

    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError("Request body is not valid base64") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Request body is not valid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def task_id_of(event: dict[str, Any], body: dict[str, Any] | None = None) -> str | None:
    """Find the task id in path parameters, query string or body, in that order."""
    for source in (event.get("pathParameters") or {}, query_params(event), body or {}):
        value = source.get("id")
        if value not in (None, ""):
            return str(value)
    return None


def int_param(params: dict[str, str], name: str) -> int | None:
    value = params.get(name)
    if value in (None, ""):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"'{name}' must be an integer") from e
    if number < 1:
        raise ValidationError(f"'{name}' must be positive")
    return number
