"""
Test helpers for building settings and provider doubles
"""
from unittest.mock import AsyncMock, Mock

import httpx
import openai

from idea_studio.config import Settings


OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def make_settings(tmp_path=None, **overrides) -> Settings:
    """Settings isolated from the process environment"""
    values = {
        "openai_api_key": "test-api-key",
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}" if tmp_path else "sqlite+aiosqlite:///:memory:",
        "rate_limit_base_delay": 2.0,
        "rate_limit_max_retries": 3,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def rate_limit_error() -> openai.RateLimitError:
    response = httpx.Response(429, request=httpx.Request("POST", OPENAI_URL))
    return openai.RateLimitError("Rate limit exceeded", response=response, body=None)


def authentication_error() -> openai.AuthenticationError:
    response = httpx.Response(401, request=httpx.Request("POST", OPENAI_URL))
    return openai.AuthenticationError("Invalid API key", response=response, body=None)


def completion(content: str, model: str = "gpt-4o-mini") -> Mock:
    """Mock chat completion carrying the given text"""
    response = Mock()
    response.choices = [Mock()]
    response.choices[0].message.content = content
    response.model = model
    response.usage = Mock()
    response.usage.total_tokens = 900
    return response


def fake_openai(*side_effect) -> Mock:
    """Mock AsyncOpenAI whose completions.create yields the given results in order"""
    client = Mock()
    client.chat.completions.create = AsyncMock(side_effect=list(side_effect))
    return client
