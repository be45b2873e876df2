"""FastAPI dependencies shared by the API routes."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from app.core.config import settings
from app.core.errors import RateLimitExceeded
from app.core.middleware import resolve_client_address
from app.services.chat_completion import ChatCompletionClient
from app.services.rate_limiting import RateLimitDecision, RateLimiter, get_rate_limiter


def enforce_rate_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> RateLimitDecision:
    client_address = getattr(request.state, "client_address", None) or resolve_client_address(request)
    decision = limiter.hit(client_address)
    if not decision.allowed:
        raise RateLimitExceeded(retry_after_seconds=decision.retry_after_seconds)
    return decision


@lru_cache
def _build_chat_client(api_key: str, model: str, max_tokens: int, temperature: float, timeout: float) -> ChatCompletionClient:
    return ChatCompletionClient(
        api_key=api_key,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        timeout=timeout,
    )


def get_chat_client() -> Optional[ChatCompletionClient]:
    """Return a configured chat client, or None when no API key is set."""
    if not settings.openai_api_key:
        return None
    return _build_chat_client(
        settings.openai_api_key,
        settings.openai_model,
        settings.openai_max_tokens,
        settings.openai_temperature,
        settings.openai_timeout_seconds,
    )
