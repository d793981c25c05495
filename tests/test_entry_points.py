"""
Tests for the deployment entry points: the Lambda adapter and the table
bootstrap script
"""

import json
from types import SimpleNamespace

import pytest

import create_tables as bootstrap
import lambda_handler
from database import DatabaseManager


def lambda_context():
    return SimpleNamespace(
        function_name="customer-service",
        function_version="1",
        invoked_function_arn="arn:aws:lambda:us-east-1:123456789012:function:customer-service",
        memory_limit_in_mb="512",
        aws_request_id="test-request-id",
        log_group_name="/aws/lambda/customer-service",
        log_stream_name="2025/01/01/[$LATEST]test123",
        get_remaining_time_in_millis=lambda: 30000,
    )


def gateway_v2_event(method, path):
    return {
        "version": "2.0",
        "routeKey": f"{method} {path}",
        "rawPath": path,
        "rawQueryString": "",
        "headers": {
            "accept": "application/json",
            "host": "api.example.com",
            "x-forwarded-for": "203.0.113.12",
            "x-forwarded-port": "443",
            "x-forwarded-proto": "https"
        },
        "requestContext": {
            "accountId": "123456789012",
            "apiId": "abcdef123",
            "domainName": "api.example.com",
            "domainPrefix": "api",
            "http": {
                "method": method,
                "path": path,
                "protocol": "HTTP/1.1",
                "sourceIp": "203.0.113.12",
                "userAgent": "test-client/1.0"
            },
            "requestId": "test-request-123",
            "routeKey": f"{method} {path}",
            "stage": "$default",
            "time": "01/Jan/2025:00:00:00 +0000",
            "timeEpoch": 1735689600000
        },
        "isBase64Encoded": False
    }


def test_describe_event_formats():
    assert lambda_handler._describe_event(gateway_v2_event("GET", "/")) == "GET /"
    assert lambda_handler._describe_event({"httpMethod": "POST", "path": "/x"}) == "POST /x"
    assert lambda_handler._describe_event({}) == "unknown event format"


def test_lambda_passes_through_adapter_response(monkeypatch):
    monkeypatch.setattr(lambda_handler, "handler", lambda event, context: {"statusCode": 204})

    response = lambda_handler.lambda_handler(gateway_v2_event("DELETE", "/api/v1/customers/1"), lambda_context())

    assert response == {"statusCode": 204}


def test_lambda_adapter_failure_returns_generic_500(monkeypatch):
    def broken_adapter(event, context):
        raise RuntimeError("adapter crashed")

    monkeypatch.setattr(lambda_handler, "handler", broken_adapter)

    response = lambda_handler.lambda_handler(gateway_v2_event("GET", "/"), lambda_context())

    assert response["statusCode"] == 500
    body = json.loads(response["body"])
    assert body["error"] == "INTERNAL_SERVER_ERROR"
    assert body["requestId"] == "test-request-id"
    assert "adapter crashed" not in response["body"]


@pytest.mark.asyncio
async def test_create_tables_script(monkeypatch):
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(bootstrap, "db_manager", manager)

    assert await bootstrap.create_tables() is True
    assert manager.engine is None
