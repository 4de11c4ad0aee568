"""Tests for AIGatewayClient retry and error classification."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from seogen.api.core.errors import ConfigurationError, ErrorCategory
from seogen.api.llm import (
    AIGatewayClient,
    LLMGatewayError,
    LLMMessage,
    LLMPaymentRequiredError,
    LLMRateLimitError,
    LLMResponseFormatError,
    RetryPolicy,
    get_model_config,
)

URL = "https://gateway.test/v1/chat/completions"
MODEL = get_model_config("gemini-flash")
MESSAGES = [LLMMessage.system("Du bist ein Texter."), LLMMessage.user("Schreibe etwas.")]


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(sleep: AsyncMock) -> AIGatewayClient:
    return AIGatewayClient(
        api_key="test-key",
        url=URL,
        retry_policy=RetryPolicy(max_attempts=3, base_delay=2.0, exponential_base=2.0),
        sleep=sleep,
    )


class TestRetry:
    """5xx and network failures are retried with backoff."""

    @pytest.mark.asyncio
    async def test_two_server_errors_then_success(
        self, client: AIGatewayClient, sleep: AsyncMock, gateway_response
    ) -> None:
        """500, 500, 200 -> three calls, sleeps of 2s and 4s."""
        responses = [
            gateway_response(500),
            gateway_response(500),
            gateway_response(200, '{"seoText": "ok"}'),
        ]
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(side_effect=responses)
            mock_client.return_value.__aenter__.return_value.post = post

            response = await client.chat(MESSAGES, MODEL)

        assert response.content == '{"seoText": "ok"}'
        assert response.attempts == 3
        assert response.finish_reason == "stop"
        assert post.await_count == 3
        assert [call.args[0] for call in sleep.await_args_list] == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_retries_exhausted(
        self, client: AIGatewayClient, sleep: AsyncMock, gateway_response
    ) -> None:
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(side_effect=[gateway_response(503)] * 3)
            mock_client.return_value.__aenter__.return_value.post = post

            with pytest.raises(LLMGatewayError) as exc_info:
                await client.chat(MESSAGES, MODEL)

        assert post.await_count == 3
        assert sleep.await_count == 2
        assert exc_info.value.status_code == 503
        assert exc_info.value.attempt == 3

    @pytest.mark.asyncio
    async def test_network_error_retried(
        self, client: AIGatewayClient, sleep: AsyncMock, gateway_response
    ) -> None:
        request = httpx.Request("POST", URL)
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(
                side_effect=[
                    httpx.ConnectError("connection refused", request=request),
                    gateway_response(200, "Antwort"),
                ]
            )
            mock_client.return_value.__aenter__.return_value.post = post

            response = await client.chat(MESSAGES, MODEL)

        assert response.content == "Antwort"
        assert response.attempts == 2
        sleep.assert_awaited_once_with(2.0)


class TestFailFast:
    """429, 402 and other 4xx are never retried."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [(429, LLMRateLimitError), (402, LLMPaymentRequiredError), (400, LLMGatewayError)],
    )
    async def test_single_call(
        self,
        client: AIGatewayClient,
        sleep: AsyncMock,
        gateway_response,
        status: int,
        error_cls: type,
    ) -> None:
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=gateway_response(status))
            mock_client.return_value.__aenter__.return_value.post = post

            with pytest.raises(error_cls) as exc_info:
                await client.chat(MESSAGES, MODEL)

        assert post.await_count == 1
        sleep.assert_not_awaited()
        assert exc_info.value.status_code == status
        assert exc_info.value.category == ErrorCategory.NON_RETRYABLE

    @pytest.mark.asyncio
    async def test_rate_limit_after_server_error(
        self, client: AIGatewayClient, sleep: AsyncMock, gateway_response
    ) -> None:
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(side_effect=[gateway_response(500), gateway_response(429)])
            mock_client.return_value.__aenter__.return_value.post = post

            with pytest.raises(LLMRateLimitError):
                await client.chat(MESSAGES, MODEL)

        assert post.await_count == 2
        sleep.assert_awaited_once_with(2.0)


class TestRequestShape:
    """Outbound payload and configuration checks."""

    @pytest.mark.asyncio
    async def test_payload_and_headers(self, client: AIGatewayClient, gateway_response) -> None:
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=gateway_response(200, "ok"))
            mock_client.return_value.__aenter__.return_value.post = post

            await client.chat(MESSAGES, MODEL)

        args, kwargs = post.call_args
        assert args[0] == URL
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["json"] == {
            "model": "google/gemini-2.5-flash",
            "messages": [
                {"role": "system", "content": "Du bist ein Texter."},
                {"role": "user", "content": "Schreibe etwas."},
            ],
            "temperature": 0.7,
        }

    @pytest.mark.asyncio
    async def test_missing_api_key(self, sleep: AsyncMock) -> None:
        client = AIGatewayClient(api_key="", url=URL, sleep=sleep)
        with patch("httpx.AsyncClient") as mock_client:
            with pytest.raises(ConfigurationError):
                await client.chat(MESSAGES, MODEL)
            mock_client.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": 5}}]},
        ],
    )
    async def test_unexpected_shape(self, client: AIGatewayClient, body: dict) -> None:
        response = httpx.Response(200, json=body, request=httpx.Request("POST", URL))
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(LLMResponseFormatError) as exc_info:
                await client.chat(MESSAGES, MODEL)

        assert exc_info.value.category == ErrorCategory.VALIDATION_FAIL

    @pytest.mark.asyncio
    async def test_null_content_is_empty_string(self, client: AIGatewayClient) -> None:
        body = {"choices": [{"message": {"content": None}}]}
        response = httpx.Response(200, json=body, request=httpx.Request("POST", URL))
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )
            result = await client.chat(MESSAGES, MODEL)

        assert result.content == ""
        assert result.finish_reason is None
