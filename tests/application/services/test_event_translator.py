"""Unit tests for EventTranslator.

Tests cover:
- Status sentinels for run lifecycle events
- Message delta text relaying
- Terminal signals for completed and failed runs
- Dispatch signal for requires-action runs
- Unknown events being ignored
"""

import pytest

from application.services import EventTranslator, RunSignal
from domain.models import ProviderEvent
from tests.fixtures.factories import ProviderEventFactory, ToolCallFactory


@pytest.fixture
def translator():
    return EventTranslator()


class TestEventTranslatorStatusSentinels:
    """Test lifecycle events mapping to status sentinels."""

    def test_run_created(self, translator):
        result = translator.translate(ProviderEventFactory.run_created())

        assert result.chunks == ["@created"]
        assert result.signal is None

    def test_run_queued(self, translator):
        result = translator.translate(ProviderEventFactory.run_queued())

        assert result.chunks == ["@queued"]
        assert result.signal is None

    def test_run_in_progress(self, translator):
        result = translator.translate(ProviderEventFactory.run_in_progress())

        assert result.chunks == ["@in_progress"]
        assert result.signal is None

    def test_sequence_keeps_order(self, translator):
        """Test that a lifecycle sequence yields sentinels in the same order."""
        events = [
            ProviderEventFactory.run_created(),
            ProviderEventFactory.run_queued(),
            ProviderEventFactory.run_in_progress(),
            ProviderEventFactory.run_queued(),
        ]

        chunks = [chunk for event in events for chunk in translator.translate(event).chunks]

        assert chunks == ["@created", "@queued", "@in_progress", "@queued"]

    def test_event_kind_is_case_sensitive(self, translator):
        result = translator.translate(ProviderEvent(kind="Thread.Run.Created"))

        assert result.chunks == []
        assert result.signal is None


class TestEventTranslatorMessageDelta:
    """Test message delta relaying."""

    def test_text_is_relayed_verbatim(self, translator):
        result = translator.translate(ProviderEventFactory.message_delta("  Hello, world!\n"))

        assert result.chunks == ["  Hello, world!\n"]
        assert result.signal is None

    def test_empty_text_yields_nothing(self, translator):
        assert translator.translate(ProviderEventFactory.message_delta("")).chunks == []

    def test_missing_text_yields_nothing(self, translator):
        assert translator.translate(ProviderEventFactory.message_delta(None)).chunks == []


class TestEventTranslatorTerminalEvents:
    """Test completed, failed and requires-action events."""

    def test_run_completed(self, translator):
        result = translator.translate(ProviderEventFactory.run_completed())

        assert result.chunks == []
        assert result.signal is RunSignal.COMPLETED
        assert result.is_terminal is True

    def test_run_failed_with_message(self, translator):
        result = translator.translate(ProviderEventFactory.run_failed("rate limited"))

        assert result.chunks == ["Error: rate limited"]
        assert result.signal is RunSignal.FAILED
        assert result.is_terminal is True

    def test_run_failed_without_message(self, translator):
        result = translator.translate(ProviderEventFactory.run_failed(None))

        assert result.chunks == ["Error: Run failed"]
        assert result.signal is RunSignal.FAILED

    def test_requires_action(self, translator):
        event = ProviderEventFactory.requires_action(ToolCallFactory.create())

        result = translator.translate(event)

        assert result.chunks == []
        assert result.signal is RunSignal.DISPATCH_REQUIRED
        assert result.is_terminal is False


class TestEventTranslatorOtherEvents:
    """Test that unrelated events are ignored."""

    @pytest.mark.parametrize(
        "kind",
        ["thread.run.step.created", "thread.message.created", "thread.message.completed", "done", "error"],
    )
    def test_other_events_are_ignored(self, translator, kind):
        result = translator.translate(ProviderEventFactory.other(kind))

        assert result.chunks == []
        assert result.signal is None
