"""
AI standup summaries.

Uses OpenAI chat completions, or Google Gemini when the configured key is
a Google API key (starts with "AIza"). Without a usable key, or when the
provider fails, generate_summary returns None and callers fall back to
fallback_summary.
"""

import logging
from collections.abc import Sequence

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)

PLACEHOLDER_KEYS = frozenset({"YOUR_OPENAI_API_KEY", "YOUR_AI_API_KEY", "changeme"})
GEMINI_KEY_PREFIX = "AIza"

SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, professional standup summaries for software developers."
)
CLOSING_INSTRUCTION = (
    "Create a brief, engaging summary in 3-5 bullet points that highlights key accomplishments, "
    "plans, and any blockers. Use emojis where appropriate to make it more readable."
)


def _section(title: str, lines: Sequence[str]) -> str:
    if not lines:
        return ""
    bullets = "\n".join(f"- {line}" for line in lines)
    return f"**{title}:**\n{bullets}\n\n"


def build_prompt(
    yesterday: str,
    today: str,
    blockers: str,
    commits: Sequence[str] = (),
    issues: Sequence[str] = (),
    events: Sequence[str] = (),
) -> str:
    prompt = "Generate a concise, professional standup summary based on the following information:\n\n"
    prompt += f"**What I did yesterday:**\n{yesterday}\n\n"
    prompt += f"**What I plan to do today:**\n{today}\n\n"
    if blockers:
        prompt += f"**Blockers:**\n{blockers}\n\n"
    prompt += _section("Recent GitHub commits", commits)
    prompt += _section("Active Jira tasks", issues)
    prompt += _section("Upcoming meetings", events)
    return prompt + CLOSING_INSTRUCTION


def is_configured(api_key: str | None) -> bool:
    return bool(api_key) and api_key not in PLACEHOLDER_KEYS


def _openai_summary(prompt: str, api_key: str) -> str:
    response = httpx.post(
        settings.OPENAI_API_URL,
        headers={"Authorization": f"Bearer {api_key}"},
        json={
            "model": settings.AI_MODEL,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": settings.AI_MAX_TOKENS,
            "temperature": 0.7,
        },
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return response.json()["choices"][0]["message"]["content"]


def _gemini_summary(prompt: str, api_key: str) -> str:
    response = httpx.post(
        settings.GEMINI_API_URL,
        params={"key": api_key},
        json={"contents": [{"parts": [{"text": prompt}]}]},
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return response.json()["candidates"][0]["content"]["parts"][0]["text"]


def generate_summary(
    yesterday: str,
    today: str,
    blockers: str,
    commits: Sequence[str] = (),
    issues: Sequence[str] = (),
    events: Sequence[str] = (),
) -> str | None:
    """
    Ask the configured AI provider for a standup summary.

    Returns:
        The summary text, or None when no provider is configured or the
        call fails for any reason (network, HTTP status, payload shape).
    """
    api_key = settings.AI_API_KEY
    if not is_configured(api_key):
        logger.info("AI API key not configured, skipping summary generation")
        return None

    prompt = build_prompt(yesterday, today, blockers, commits, issues, events)
    provider = "gemini" if api_key.startswith(GEMINI_KEY_PREFIX) else "openai"
    try:
        if provider == "gemini":
            summary = _gemini_summary(prompt, api_key)
        else:
            summary = _openai_summary(prompt, api_key)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("AI summary request to %s failed: %s", provider, e)
        return None
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning("Unexpected AI summary payload from %s: %s", provider, e)
        return None

    summary = (summary or "").strip()
    if not summary:
        return None
    logger.info("AI summary generated using %s", provider)
    return summary


def _bullet(text: str | None) -> str:
    text = (text or "").strip()
    if not text:
        return "• _No information provided_\n"
    if text.startswith(("•", "-", "*")):
        return f"{text}\n"
    return f"• {text}\n"


def fallback_summary(yesterday: str, today: str, blockers: str | None) -> str:
    """Deterministic summary used when no AI summary is available."""
    summary = "📋 **Daily Standup Summary**\n\n"
    summary += "✅ **Completed Yesterday:**\n" + _bullet(yesterday) + "\n"
    summary += "🎯 **Plan for Today:**\n" + _bullet(today) + "\n"
    if blockers and blockers.strip().lower() not in ("none", "no blockers", "no"):
        summary += "⚠️ **Blockers:**\n" + _bullet(blockers) + "\n"
    else:
        summary += "✨ **No blockers reported**\n\n"
    return summary + "_Note: Using simplified summary (AI summary unavailable)_"
