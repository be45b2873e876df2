from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_chat_client
from app.api.schemas.planning import TokenUsage
from app.core.config import settings
from app.main import app
from app.observability.client import reset_opik_client
from app.services.chat_completion import ChatCompletion
from app.services.rate_limiting import InMemoryRateLimiter, get_rate_limiter


class FakeChatClient:
    """Stands in for ChatCompletionClient; records prompts and replays a canned reply."""

    def __init__(self, content: str = "", error: Optional[Exception] = None) -> None:
        self.content = content
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> ChatCompletion:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return ChatCompletion(
            content=self.content,
            usage=TokenUsage(prompt_tokens=120, completion_tokens=80, total_tokens=200),
        )


@pytest.fixture(autouse=True)
def _isolate_singletons(monkeypatch) -> Iterator[None]:
    monkeypatch.setattr(settings, "opik_enabled", False)
    reset_opik_client()
    get_rate_limiter.cache_clear()
    yield
    app.dependency_overrides.clear()
    get_rate_limiter.cache_clear()
    reset_opik_client()


@pytest.fixture()
def chat_client() -> FakeChatClient:
    return FakeChatClient(content="Here is your plan for today.")


@pytest.fixture()
def rate_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(max_requests=100, window_seconds=900)


@pytest.fixture()
def client(chat_client: FakeChatClient, rate_limiter: InMemoryRateLimiter) -> Iterator[TestClient]:
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    with TestClient(app) as test_client:
        yield test_client
