"""Pytest configuration and fixtures for tests."""

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

GATEWAY_URL = "https://gateway.test/v1/chat/completions"


@pytest.fixture
def scenario_a_request() -> dict[str, Any]:
    """Minimal fresh-generation request body."""
    return {
        "focusKeyword": "Kinesio Tape",
        "pageType": "product",
        "contentLength": "medium",
        "keywordDensity": "normal",
    }


@pytest.fixture
def scenario_a_content() -> str:
    """Gateway content for a well-formed generation."""
    return json.dumps(
        {
            "seoText": "<h1>Kinesio Tape Guide</h1><p>" + "word " * 200 + "</p>",
            "faq": [{"question": "Was ist Kinesio Tape?", "answer": "Ein elastisches Tape."}],
            "title": "Kinesio Tape",
            "metaDescription": "Alles über Kinesio Tape",
        }
    )


@pytest.fixture
def existing_content() -> dict[str, Any]:
    """Previously generated content sent back by the caller."""
    return {
        "title": "Kinesio Tape",
        "metaDescription": "Alles über Kinesio Tape",
        "seoText": "<h1>Kinesio Tape</h1><p>Bestehender Text.</p>",
        "faq": [],
    }


def _gateway_response(status_code: int, content: str | None = None) -> httpx.Response:
    """Real httpx.Response shaped like the chat-completions endpoint."""
    request = httpx.Request("POST", GATEWAY_URL)
    if status_code == 200:
        body = {"choices": [{"message": {"content": content}, "finish_reason": "stop"}]}
        return httpx.Response(200, json=body, request=request)
    return httpx.Response(status_code, text=f"error {status_code}", request=request)


@pytest.fixture
def llm_response_factory():
    """Build LLMResponse objects for mocked gateways."""
    from seogen.api.llm import LLMResponse, TokenUsage

    def _factory(content: str) -> LLMResponse:
        return LLMResponse(
            content=content,
            model="google/gemini-2.5-flash",
            provider="google",
            token_usage=TokenUsage(input=10, output=20),
        )

    return _factory


@pytest.fixture
def mock_gateway(llm_response_factory) -> MagicMock:
    """AIGatewayClient stand-in whose ``chat`` is an AsyncMock."""
    gateway = MagicMock()
    gateway.chat = AsyncMock(return_value=llm_response_factory("{}"))
    return gateway


@pytest.fixture
def gateway_response():
    """Factory for chat-completions HTTP responses (status, content)."""
    return _gateway_response
