"""
Unit tests for the generation client
"""
from unittest.mock import AsyncMock, call, patch

import pytest

from idea_studio.errors import MissingCredentialError, ProviderError, ProviderRateLimited
from idea_studio.services.generation_client import GenerationClient

from support import authentication_error, completion, fake_openai, make_settings, rate_limit_error


class TestGenerationClient:
    """Test provider calls and the rate-limit policy"""

    @pytest.fixture
    def sleep(self):
        return AsyncMock()

    def build(self, openai_client, sleep, **overrides):
        return GenerationClient(make_settings(**overrides), client=openai_client, sleep=sleep)

    @pytest.mark.asyncio
    async def test_generate_success(self, sleep, provider_text):
        openai_client = fake_openai(completion(provider_text))
        client = self.build(openai_client, sleep)

        result = await client.generate("prompt")

        assert result.text == provider_text
        assert result.model == "gpt-4o-mini"
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_parameters(self, sleep, provider_text):
        openai_client = fake_openai(completion(provider_text))
        client = self.build(openai_client, sleep)

        await client.generate("my prompt")

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.6
        assert kwargs["top_p"] == 0.8
        assert kwargs["max_tokens"] == 8192
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][-1] == {"role": "user", "content": "my prompt"}

    @pytest.mark.asyncio
    async def test_three_rate_limits_then_success(self, sleep, provider_text):
        openai_client = fake_openai(
            rate_limit_error(), rate_limit_error(), rate_limit_error(), completion(provider_text)
        )
        client = self.build(openai_client, sleep)

        result = await client.generate("prompt")

        assert result.text == provider_text
        assert openai_client.chat.completions.create.await_count == 4
        assert sleep.await_args_list == [call(2.0), call(4.0), call(8.0)]

    @pytest.mark.asyncio
    async def test_fourth_rate_limit_raises(self, sleep):
        openai_client = fake_openai(*[rate_limit_error() for _ in range(4)])
        client = self.build(openai_client, sleep)

        with pytest.raises(ProviderRateLimited) as exc_info:
            await client.generate("prompt")

        assert exc_info.value.status_code == 429
        assert openai_client.chat.completions.create.await_count == 4
        assert sleep.await_count == 3

    @pytest.mark.asyncio
    async def test_configured_base_delay(self, sleep, provider_text):
        openai_client = fake_openai(rate_limit_error(), completion(provider_text))
        client = self.build(openai_client, sleep, rate_limit_base_delay=0.5)

        await client.generate("prompt")

        assert sleep.await_args_list == [call(0.5)]

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, sleep):
        openai_client = fake_openai(authentication_error())
        client = self.build(openai_client, sleep)

        with pytest.raises(ProviderError) as exc_info:
            await client.generate("prompt")

        assert not isinstance(exc_info.value, ProviderRateLimited)
        assert openai_client.chat.completions.create.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_completion_raises(self, sleep):
        client = self.build(fake_openai(completion("")), sleep)

        with pytest.raises(ProviderError, match="empty completion"):
            await client.generate("prompt")

    def test_missing_key_does_not_raise_on_init(self):
        client = GenerationClient(make_settings(openai_api_key=None))
        assert client.api_key is None

    @pytest.mark.asyncio
    async def test_missing_key_raises_on_generate(self):
        client = GenerationClient(make_settings(openai_api_key=None))

        with pytest.raises(MissingCredentialError, match="OPENAI_API_KEY"):
            await client.generate("prompt")

    def test_sdk_client_built_with_timeout_and_no_sdk_retries(self):
        client = GenerationClient(make_settings(request_timeout=15))

        with patch("idea_studio.services.generation_client.AsyncOpenAI") as mock_openai:
            client.client

        mock_openai.assert_called_once_with(api_key="test-api-key", timeout=15, max_retries=0)
