"""Unit tests for serverless event parsing helpers."""

from __future__ import annotations

import json

import pytest

from zoho_tasks.errors import NotFoundError, ValidationError
from zoho_tasks.functions.http import (
    error_response,
    int_param,
    json_response,
    method_of,
    parse_body,
    task_id_of,
)


class TestParseBody:
    def test_missing_body_is_empty(self):
        assert parse_body({}) == {}
        assert parse_body({"body": ""}) == {}

    def test_already_decoded_body(self):
        assert parse_body({"body": {"title": "x"}}) == {"title": "x"}

    def test_json_body(self):
        assert parse_body({"body": '{"title": "x"}'}) == {"title": "x"}

    def test_array_body_is_rejected(self):
        with pytest.raises(ValidationError, match="JSON object"):
            parse_body({"body": "[1, 2]"})

    def test_bad_base64(self):
        with pytest.raises(ValidationError, match="base64"):
            parse_body({"body": "%%%", "isBase64Encoded": True})


class TestTaskId:
    def test_path_wins_over_query_and_body(self):
        event = {"pathParameters": {"id": "p"}, "queryStringParameters": {"id": "q"}}
        assert task_id_of(event, {"id": "b"}) == "p"

    def test_query_wins_over_body(self):
        event = {"queryStringParameters": {"id": "q"}}
        assert task_id_of(event, {"id": "b"}) == "q"

    def test_numeric_body_id_becomes_string(self):
        assert task_id_of({}, {"id": 4150868000000001}) == "4150868000000001"

    def test_absent(self):
        assert task_id_of({"pathParameters": {"id": ""}}) is None


class TestIntParam:
    def test_absent(self):
        assert int_param({}, "page") is None

    def test_parses(self):
        assert int_param({"page": "4"}, "page") == 4

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            int_param({"page": value}, "page")


def test_method_of_is_upper_case():
    assert method_of({"httpMethod": "get"}) == "GET"
    assert method_of({}) == ""


def test_json_response_has_cors_and_json():
    response = json_response(200, {"ok": True})

    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert json.loads(response["body"]) == {"ok": True}


def test_error_response_uses_error_status_and_hint():
    response = error_response(NotFoundError("Task 1 not found"))

    assert response["statusCode"] == 404
    body = json.loads(response["body"])
    assert body["error"] == "Task 1 not found"
    assert body["hint"]


def test_method_of_null_http_context():
    assert method_of({"requestContext": {"http": None}}) == ""
    assert method_of({"requestContext": {"http": {"method": None}}}) == ""
    assert method_of({"requestContext": {"http": {"method": "post"}}}) == "POST"
