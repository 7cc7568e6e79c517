"""End-to-end tests of the application wiring with a scripted provider."""

import pytest
from fastapi.testclient import TestClient

from domain.exceptions import ConfigurationError
from main import create_app
from tests.fixtures.factories import FakeConversationProvider, ProviderEventFactory, ToolCallFactory

E = ProviderEventFactory


class TestApplication:
    """Test the assembled application."""

    def test_stock_price_conversation(self, settings, mail_sender):
        provider = FakeConversationProvider(
            run_events=[E.run_created(), E.run_queued(), E.run_in_progress(), E.requires_action(ToolCallFactory.create("getStockPrice", '{"symbol": "AAPL"}', "call_1"))],
            continuations=[[E.message_delta("AAPL trades at "), E.message_delta("$123.45"), E.run_completed()]],
        )
        app = create_app(settings, provider=provider, mail_sender=mail_sender)

        with TestClient(app) as client:
            response = client.post("/api/assistant", json={"message": "What is AAPL worth?"})

        assert response.status_code == 200
        assert response.text == "@thread:thread_new_1@created@queued@in_progress" + "AAPL trades at $123.45"
        assert provider.closed is True

    def test_email_tool_round_trip(self, settings, mail_sender):
        provider = FakeConversationProvider(
            run_events=[E.requires_action(ToolCallFactory.create("sendEmail", '{"subject": "Alert", "body": "AAPL moved"}', "call_1"))],
            continuations=[[E.message_delta("Sent."), E.run_completed()]],
            existing_threads=["thread_known"],
        )
        app = create_app(settings, provider=provider, mail_sender=mail_sender)

        with TestClient(app) as client:
            response = client.post("/api/assistant", json={"message": "Email me"}, headers={"X-Thread-ID": "thread_known"})

        assert response.text == "Sent."
        mail_sender.send.assert_awaited_once_with("alerts@example.com", "Alert", "AAPL moved")
        assert provider.submissions[0][2][0].output == "Email sent to alerts@example.com"

    def test_failed_run_still_returns_200(self, settings, mail_sender):
        provider = FakeConversationProvider(run_events=[E.run_failed("rate limited")], existing_threads=["thread_known"])
        app = create_app(settings, provider=provider, mail_sender=mail_sender)

        with TestClient(app) as client:
            response = client.post("/api/assistant", content="Hi", headers={"content-type": "text/plain"})

        assert response.status_code == 200
        assert response.text == "Error: rate limited"

    def test_empty_message_makes_no_provider_call(self, settings, mail_sender):
        provider = FakeConversationProvider()
        app = create_app(settings, provider=provider, mail_sender=mail_sender)

        with TestClient(app) as client:
            response = client.post("/api/assistant", json={"message": " "})

        assert response.status_code == 400
        assert provider.retrieved_assistants == []
        assert provider.created_threads == []

    def test_health(self, settings_factory, mail_sender):
        app = create_app(settings_factory(assistant_id=None), provider=FakeConversationProvider(), mail_sender=mail_sender)

        with TestClient(app) as client:
            response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["provider_credentials"] is True
        assert body["checks"]["assistant"] == "auto-create"

    def test_missing_credentials_fail_at_startup(self, settings_factory, mail_sender):
        with pytest.raises(ConfigurationError):
            create_app(settings_factory(azure_openai_api_key=None), mail_sender=mail_sender)
