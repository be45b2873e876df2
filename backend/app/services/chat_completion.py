"""Thin wrapper around the OpenAI chat completions API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import openai

from app.api.schemas.planning import TokenUsage
from app.core.errors import ResponseShapeError, UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class ChatCompletion:
    content: str
    usage: Optional[TokenUsage]


class ChatCompletionClient:
    """Send a system/user message pair and return the first completion's text.

    A single attempt is made; the SDK's own retry loop is switched off so that a
    failure is reported to the caller immediately.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: float = 60.0,
        client: Any = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client or openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(self, system_prompt: str, user_prompt: str) -> ChatCompletion:
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.APIStatusError as exc:
            logger.warning("Chat completion returned HTTP %s", exc.status_code)
            raise UpstreamServiceError("AI service unavailable", details={"status": exc.status_code}) from exc
        except openai.APIError as exc:
            logger.warning("Chat completion request failed: %s", exc.__class__.__name__)
            raise UpstreamServiceError("AI service unavailable", details={"reason": exc.__class__.__name__}) from exc

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices and choices[0].message else None
        if not content or not content.strip():
            raise ResponseShapeError("Invalid AI response format")

        return ChatCompletion(content=content, usage=_usage_from(completion))


def _usage_from(completion: Any) -> Optional[TokenUsage]:
    usage = getattr(completion, "usage", None)
    if usage is None:
        return None
    return TokenUsage(
        prompt_tokens=usage.prompt_tokens or 0,
        completion_tokens=usage.completion_tokens or 0,
        total_tokens=usage.total_tokens or 0,
    )
