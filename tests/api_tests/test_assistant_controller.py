"""Tests for AssistantController.

Tests cover:
- JSON and legacy request shapes
- Thread continuation header
- Empty messages and unparseable bodies
- CORS preflight and response headers
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.controllers import CORS_HEADERS, AssistantController
from domain.models import AssistantRequest


@pytest.fixture
def assistant_service():
    """Mock AssistantService recording requests and streaming fixed chunks."""
    service = MagicMock()
    service.requests = []

    async def process_message(request):
        service.requests.append(request)
        yield "@created"
        yield "Hello"
        yield " there"

    service.process_message = MagicMock(side_effect=process_message)
    return service


@pytest.fixture
def client(assistant_service):
    app = FastAPI()
    app.include_router(AssistantController(assistant_service).router, prefix="/api")
    return TestClient(app)


class TestAssistantControllerJsonRequests:
    """Test the structured request shape."""

    def test_streams_chunks(self, client, assistant_service):
        response = client.post("/api/assistant", json={"message": "Hi"})

        assert response.status_code == 200
        assert response.text == "@createdHello there"
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["transfer-encoding"] == "chunked"
        assert response.headers["access-control-allow-origin"] == "*"
        assert assistant_service.requests == [AssistantRequest("Hi")]

    def test_file_ids_and_thread_header(self, client, assistant_service):
        response = client.post(
            "/api/assistant",
            json={"message": "Summarize", "fileIds": ["file_1", "file_2"]},
            headers={"X-Thread-ID": "thread_abc"},
        )

        assert response.status_code == 200
        request = assistant_service.requests[0]
        assert request.file_ids == ("file_1", "file_2")
        assert request.thread_id == "thread_abc"
        assert request.supports_continuation is True

    def test_null_file_ids(self, client, assistant_service):
        response = client.post("/api/assistant", json={"message": "Hi", "fileIds": None})

        assert response.status_code == 200
        assert assistant_service.requests[0].file_ids == ()

    @pytest.mark.parametrize("payload", [{"message": ""}, {"message": "   \n\t"}, {}, {"message": None}])
    def test_empty_message(self, client, assistant_service, payload):
        response = client.post("/api/assistant", json=payload)

        assert response.status_code == 400
        assert response.text == "Message is required"
        assert response.headers["access-control-allow-origin"] == "*"
        assistant_service.process_message.assert_not_called()

    def test_invalid_json(self, client, assistant_service):
        response = client.post("/api/assistant", content=b"{not json", headers={"content-type": "application/json"})

        assert response.status_code == 500
        assert response.text.startswith("Request error: ")
        assistant_service.process_message.assert_not_called()

    def test_invalid_field_type(self, client, assistant_service):
        response = client.post("/api/assistant", json={"message": "Hi", "fileIds": "file_1"})

        assert response.status_code == 500
        assert response.text.startswith("Request error: fileIds")


class TestAssistantControllerLegacyRequests:
    """Test the plain-text request shape."""

    def test_text_body(self, client, assistant_service):
        response = client.post(
            "/api/assistant",
            content="What is AAPL worth?",
            headers={"content-type": "text/plain", "X-Thread-ID": "thread_ignored"},
        )

        assert response.status_code == 200
        assert assistant_service.requests == [AssistantRequest.legacy("What is AAPL worth?")]

    def test_empty_text_body(self, client, assistant_service):
        response = client.post("/api/assistant", content="  ", headers={"content-type": "text/plain"})

        assert response.status_code == 400
        assert response.text == "Message is required"

    def test_undecodable_body(self, client, assistant_service):
        response = client.post("/api/assistant", content=b"\xff\xfe\xfa", headers={"content-type": "text/plain"})

        assert response.status_code == 500
        assert response.text.startswith("Request error: ")


class TestAssistantControllerPreflight:
    """Test CORS preflight handling."""

    def test_options(self, client, assistant_service):
        response = client.options("/api/assistant")

        assert response.status_code == 200
        assert response.text == ""
        for name, value in CORS_HEADERS.items():
            assert response.headers[name] == value
        assistant_service.process_message.assert_not_called()
