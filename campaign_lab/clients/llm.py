"""Generic LLM client with provider-agnostic interface."""

import asyncio
import logging
from dataclasses import dataclass

from openai import APIStatusError, AsyncOpenAI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMResponse:
    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Generic LLM client. Currently uses OpenAI, interface is provider-agnostic."""

    def __init__(self, api_key: str, model: str = "gpt-5.2", max_retries: int = 5):
        # Retries are handled by _call_with_retry only
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.max_retries = max_retries
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    async def call(
        self,
        system_prompt: str,
        user_message: str,
        label: str = "",
        json_output: bool = False,
    ) -> LLMResponse:
        """Make LLM call and return response text with token usage.

        Args:
            system_prompt: System/developer prompt.
            user_message: User message.
            label: Optional label for logging token usage.
            json_output: Ask the model for a JSON object response.

        Returns:
            LLMResponse with stripped text and this call's token counts.
        """
        kwargs = {}
        if json_output:
            kwargs["text"] = {"format": {"type": "json_object"}}

        response = await self._call_with_retry(
            lambda: self._client.responses.create(
                model=self.model,
                input=[
                    {"role": "developer", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                reasoning={"effort": "medium"},
                **kwargs,
            )
        )

        # Track tokens
        usage = response.usage
        input_tokens = usage.input_tokens if usage else 0
        output_tokens = usage.output_tokens if usage else 0
        self.total_input_tokens += input_tokens
        self.total_output_tokens += output_tokens

        if label:
            logger.info("%s: input=%d, output=%d", label, input_tokens, output_tokens)

        return LLMResponse(
            text=(response.output_text or "").strip(),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def _call_with_retry(self, func, retry_codes=(503, 429)):
        """Retry API calls on transient errors with exponential backoff."""
        for attempt in range(self.max_retries):
            try:
                return await func()
            except APIStatusError as e:
                if e.status_code not in retry_codes or attempt == self.max_retries - 1:
                    raise

                wait_time = 2 ** attempt  # 1s, 2s, 4s
                logger.warning(
                    "LLM API error (attempt %d/%d), retrying in %ds: %s",
                    attempt + 1, self.max_retries, wait_time, e,
                )
                await asyncio.sleep(wait_time)

    def get_token_totals(self) -> tuple[int, int]:
        """Return accumulated (input, output) tokens."""
        return self.total_input_tokens, self.total_output_tokens
