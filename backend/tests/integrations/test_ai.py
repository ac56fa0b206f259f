"""
Tests for AI summaries and the template fallback.
"""

from unittest.mock import patch

import httpx
import pytest
from django.test import override_settings

from apps.integrations.ai import build_prompt, fallback_summary, generate_summary, is_configured

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def make_response(payload, status_code: int = 200, url: str = OPENAI_URL) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("POST", url))


class TestGenerateSummary:
    """Tests for generate_summary provider selection and failure handling."""

    @override_settings(AI_API_KEY="")
    def test_no_key_returns_none_without_request(self) -> None:
        with patch("apps.integrations.ai.httpx.post") as mock_post:
            assert generate_summary("y", "t", "") is None

        mock_post.assert_not_called()

    @override_settings(AI_API_KEY="YOUR_OPENAI_API_KEY")
    def test_placeholder_key_returns_none(self) -> None:
        with patch("apps.integrations.ai.httpx.post") as mock_post:
            assert generate_summary("y", "t", "") is None

        mock_post.assert_not_called()

    @override_settings(AI_API_KEY="sk-test", AI_MODEL="gpt-4")
    def test_openai(self) -> None:
        payload = {"choices": [{"message": {"content": "  • Did things  "}}]}
        with patch("apps.integrations.ai.httpx.post", return_value=make_response(payload)) as mock_post:
            summary = generate_summary("y", "t", "", commits=["acme/api: fix"])

        assert summary == "• Did things"
        kwargs = mock_post.call_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["json"]["model"] == "gpt-4"
        assert "acme/api: fix" in kwargs["json"]["messages"][1]["content"]
        assert kwargs["timeout"] == 30.0

    @override_settings(AI_API_KEY="AIzaTestKey")
    def test_gemini_selected_by_key_prefix(self) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": "Gemini summary"}]}}]}
        with patch("apps.integrations.ai.httpx.post", return_value=make_response(payload)) as mock_post:
            summary = generate_summary("y", "t", "")

        assert summary == "Gemini summary"
        assert mock_post.call_args.kwargs["params"] == {"key": "AIzaTestKey"}
        assert "contents" in mock_post.call_args.kwargs["json"]

    @override_settings(AI_API_KEY="sk-test")
    def test_http_failure_returns_none(self) -> None:
        with patch("apps.integrations.ai.httpx.post", side_effect=httpx.ReadTimeout("slow")):
            assert generate_summary("y", "t", "") is None

    @override_settings(AI_API_KEY="sk-test")
    def test_error_status_returns_none(self) -> None:
        with patch("apps.integrations.ai.httpx.post", return_value=make_response({"error": "quota"}, 429)):
            assert generate_summary("y", "t", "") is None

    @override_settings(AI_API_KEY="sk-test")
    def test_unexpected_payload_returns_none(self) -> None:
        with patch("apps.integrations.ai.httpx.post", return_value=make_response({"choices": []})):
            assert generate_summary("y", "t", "") is None

    @override_settings(AI_API_KEY="sk-test")
    def test_blank_summary_returns_none(self) -> None:
        payload = {"choices": [{"message": {"content": "   "}}]}
        with patch("apps.integrations.ai.httpx.post", return_value=make_response(payload)):
            assert generate_summary("y", "t", "") is None


class TestPrompt:
    def test_includes_only_present_sections(self) -> None:
        prompt = build_prompt("Fixed bug", "Tests", "", commits=["acme/api: fix"])

        assert "Fixed bug" in prompt
        assert "Recent GitHub commits" in prompt
        assert "Blockers" not in prompt
        assert "Active Jira tasks" not in prompt

    @pytest.mark.parametrize(("key", "expected"), [("", False), (None, False), ("changeme", False), ("sk-1", True)])
    def test_is_configured(self, key, expected) -> None:
        assert is_configured(key) is expected


class TestFallbackSummary:
    def test_with_blockers(self) -> None:
        summary = fallback_summary("Fixed bug", "Write tests", "Waiting on review")

        assert "• Fixed bug" in summary
        assert "• Write tests" in summary
        assert "**Blockers:**" in summary
        assert "Waiting on review" in summary

    @pytest.mark.parametrize("blockers", ["", None, "none", "No blockers", "no"])
    def test_without_blockers(self, blockers) -> None:
        summary = fallback_summary("Fixed bug", "Write tests", blockers)

        assert "No blockers reported" in summary

    def test_keeps_existing_bullets(self) -> None:
        summary = fallback_summary("- one\n- two", "", "")

        assert "- one\n- two" in summary
        assert "_No information provided_" in summary

    def test_deterministic(self) -> None:
        assert fallback_summary("a", "b", "c") == fallback_summary("a", "b", "c")
