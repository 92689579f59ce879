"""Tests pour les clients LLM (OpenAI et déterministe)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from inyon.core.container import container
from inyon.domain.generation import parse_insight_output
from inyon.infra.llm.base import LLMProviderError
from inyon.infra.llm.fake_deterministic import FakeDeterministicLLM
from inyon.infra.llm.openai_client import OpenAILLM
from inyon.scripts.run_server_fake_llm import install_fake_llm

MESSAGES = [{"role": "user", "content": "prompt"}]


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=30, total_tokens=42),
    )


@pytest.mark.asyncio
async def test_openai_without_key_raises_provider_error() -> None:
    llm = OpenAILLM(api_key=None)
    assert llm.client is None
    with pytest.raises(LLMProviderError):
        await llm.generate(MESSAGES)


@pytest.mark.asyncio
async def test_openai_returns_text_and_usage() -> None:
    llm = OpenAILLM(api_key="sk-test", model="gpt-4o-mini")
    create = AsyncMock(return_value=_completion('{"insightText": "x"}'))
    llm.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    text, usage = await llm.generate(MESSAGES, with_usage=True, temperature=0.7)

    assert text == '{"insightText": "x"}'
    assert usage["total_tokens"] == 42
    create.assert_awaited_once_with(model="gpt-4o-mini", messages=MESSAGES, temperature=0.7)


@pytest.mark.asyncio
async def test_openai_empty_completion_raises() -> None:
    llm = OpenAILLM(api_key="sk-test")
    create = AsyncMock(return_value=_completion(None))
    llm.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    with pytest.raises(LLMProviderError):
        await llm.generate(MESSAGES)


@pytest.mark.asyncio
async def test_fake_llm_is_deterministic_and_valid() -> None:
    llm = FakeDeterministicLLM()
    first = await llm.generate(MESSAGES)
    second = await llm.generate(MESSAGES)
    assert first == second
    assert len(parse_insight_output(first)) >= 40


def test_install_fake_llm_rewires_orchestrator() -> None:
    original = (container.llm, container.generator)
    try:
        install_fake_llm()
        assert isinstance(container.llm, FakeDeterministicLLM)
        assert container.orchestrator.generator is container.generator
    finally:
        container.llm, container.generator = original
        container.orchestrator.generator = original[1]


@pytest.mark.asyncio
async def test_openai_sdk_error_is_wrapped() -> None:
    llm = OpenAILLM(api_key="sk-test")
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    create = AsyncMock(side_effect=openai.APIConnectionError(request=request))
    llm.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    with pytest.raises(LLMProviderError) as exc_info:
        await llm.generate(MESSAGES)
    assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)
    assert "APIConnectionError" in str(exc_info.value)
