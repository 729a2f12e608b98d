"""
Generation client for the OpenAI chat completions API
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import openai
from openai import AsyncOpenAI

from idea_studio.config import Settings
from idea_studio.errors import MissingCredentialError, ProviderError, ProviderRateLimited
from idea_studio.logging_config import logger
from idea_studio.services.retry import RetriesExhausted, exponential_backoff, with_retry


SYSTEM_MESSAGE = "You are a startup advisor who responds only with valid JSON."


@dataclass(frozen=True)
class GenerationResult:
    text: str
    model: str


def is_rate_limit(error: BaseException) -> bool:
    return isinstance(error, openai.RateLimitError)


class GenerationClient:
    """Calls the provider under a bounded rate-limit retry policy"""

    def __init__(
        self,
        settings: Settings,
        client: Optional[AsyncOpenAI] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize generation client

        A missing API key is tolerated here and reported on first use,
        so the service can start without it.

        Args:
            settings: Application settings
            client: Preconfigured OpenAI client (built from settings if not provided)
            sleep: Awaitable sleep used between retries
        """
        self.api_key = settings.openai_api_key
        self.model = settings.openai_model
        self.temperature = settings.generation_temperature
        self.top_p = settings.generation_top_p
        self.max_tokens = settings.generation_max_tokens
        self.timeout = settings.request_timeout
        self.max_retries = settings.rate_limit_max_retries
        self.backoff = exponential_backoff(settings.rate_limit_base_delay)
        self.sleep = sleep
        self._client = client

        if not self.api_key and client is None:
            logger.warning("OPENAI_API_KEY is not set, idea generation will fail until it is configured")

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise MissingCredentialError("OPENAI_API_KEY")
            # SDK retries are disabled, the rate-limit policy lives in generate()
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def _create_completion(self, prompt: str) -> Any:
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"},
        )

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Generate raw JSON text for a prompt

        Args:
            prompt: Rendered prompt

        Returns:
            GenerationResult with the completion text and the model that produced it

        Raises:
            MissingCredentialError: If no API key is configured
            ProviderRateLimited: If rate limiting persisted through every retry
            ProviderError: For any other provider failure
        """
        if self._client is None and not self.api_key:
            raise MissingCredentialError("OPENAI_API_KEY")

        try:
            response = await with_retry(
                lambda: self._create_completion(prompt),
                is_retryable=is_rate_limit,
                max_retries=self.max_retries,
                backoff=self.backoff,
                sleep=self.sleep,
            )
        except RetriesExhausted as e:
            logger.error(f"Provider rate limit persisted after {e.attempts} attempts")
            raise ProviderRateLimited(e.attempts) from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error: {str(e)}")
            raise ProviderError(f"Provider request failed: {str(e)}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ProviderError("Provider returned an empty completion")

        text = response.choices[0].message.content
        tokens_used = response.usage.total_tokens if response.usage else 0
        logger.debug(f"Generated completion, tokens used: {tokens_used}")

        return GenerationResult(text=text, model=response.model or self.model)
