# tests/test_notifier.py
"""
Issue notification tests
Tests: channel messages for internal issues, skipped builds
"""

import json

import pytest

from xrayfix.core.exceptions import RemoteCallError
from xrayfix.remediation import IssueNotifier
from xrayfix.schemas.graph import CommitQueryResult
from xrayfix.schemas.violation import Violation

from conftest import violation_event


@pytest.fixture
def notifier(artifactory, graph, chat):
    return IssueNotifier(artifactory, graph, chat)


@pytest.fixture
def internal_violation():
    return Violation.model_validate(violation_event("myjob:42", provider="Atomist"))


class TestIssueNotifier:
    """Test notification of repository channels"""

    @pytest.mark.asyncio
    async def test_offers_block_and_ignore(self, notifier, internal_violation, chat):
        outcome = await notifier.notify(internal_violation)

        assert outcome.code == "success"
        assert outcome.message.startswith("Notified 1 of 1")

        message, channel_id, message_id = chat.address_channel.await_args.args
        assert channel_id == "C123"
        assert message_id == "CVE-123 fixes blah blah"
        assert message["text"] == "*Incoming Xray Security Issue*"
        buttons = message["attachments"][2]["actions"]
        assert [b["name"] for b in buttons] == ["BlockArtifactoryDownload", "IgnoreViolationForProject"]
        assert json.loads(buttons[0]["value"])["componentId"] == "junit:junit:4.0"

    @pytest.mark.asyncio
    async def test_unresolvable_build_skipped(self, notifier, internal_violation, graph, chat):
        graph.find_build_for_commit.return_value = CommitQueryResult.model_validate({"Commit": []})

        outcome = await notifier.notify(internal_violation)

        assert outcome.message.startswith("Notified 0 of 1")
        chat.address_channel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_error_skipped(self, notifier, internal_violation, artifactory, chat):
        artifactory.build_to_commit.side_effect = RemoteCallError("artifactory", "HTTP 404", 404)

        outcome = await notifier.notify(internal_violation)

        assert outcome.code == "success"
        chat.address_channel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_chat_failure_does_not_stop_others(self, notifier, chat):
        violation = Violation.model_validate(violation_event("myjob:42", "other:3", provider="Atomist"))
        chat.address_channel.side_effect = [RemoteCallError("slack", "channel_not_found"), None]

        outcome = await notifier.notify(violation)

        assert outcome.message.startswith("Notified 1 of 2")
        assert chat.address_channel.await_count == 2
