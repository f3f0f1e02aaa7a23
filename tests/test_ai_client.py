"""Tests for the AI provider client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from openai import APIConnectionError, APITimeoutError

from thrryv_stage.core.errors import EvaluationError, EvaluationTimeoutError
from thrryv_stage.services.ai_client import AIClient, AIConfig

_REQUEST = httpx.Request("POST", "https://ai.test/v1/chat/completions")


def _config(api_key: str | None = "test-key") -> AIConfig:
    return AIConfig(
        base_url="https://ai.test/v1/",
        api_key=api_key,
        model="test-model",
        timeout_seconds=5.0,
    )


def _completion(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture
def mock_openai(mocker):
    openai_cls = mocker.patch("thrryv_stage.services.ai_client.AsyncOpenAI")
    instance = openai_cls.return_value
    instance.chat.completions.create = AsyncMock(return_value=_completion('{"ok": true}'))
    instance.close = AsyncMock()
    return openai_cls


@pytest.mark.asyncio
async def test_generate_sends_system_and_user_messages(mock_openai) -> None:
    client = AIClient(_config())

    text = await client.generate("instructions", "prompt", 0.3)

    assert text == '{"ok": true}'
    mock_openai.assert_called_once_with(
        api_key="test-key",
        base_url="https://ai.test/v1/",
        timeout=5.0,
        max_retries=0,
    )
    mock_openai.return_value.chat.completions.create.assert_awaited_once_with(
        model="test-model",
        messages=[
            {"role": "system", "content": "instructions"},
            {"role": "user", "content": "prompt"},
        ],
        temperature=0.3,
    )


@pytest.mark.asyncio
async def test_generate_without_api_key(mock_openai) -> None:
    client = AIClient(_config(api_key=None))

    assert client.enabled is False
    with pytest.raises(EvaluationError):
        await client.generate("instructions", "prompt", 0.3)
    mock_openai.assert_not_called()


@pytest.mark.asyncio
async def test_generate_maps_timeout(mock_openai) -> None:
    mock_openai.return_value.chat.completions.create.side_effect = APITimeoutError(request=_REQUEST)
    client = AIClient(_config())

    with pytest.raises(EvaluationTimeoutError):
        await client.generate("instructions", "prompt", 0.3)


@pytest.mark.asyncio
async def test_generate_maps_connection_error(mock_openai) -> None:
    mock_openai.return_value.chat.completions.create.side_effect = APIConnectionError(
        request=_REQUEST
    )
    client = AIClient(_config())

    with pytest.raises(EvaluationError) as exc_info:
        await client.generate("instructions", "prompt", 0.3)

    assert not isinstance(exc_info.value, EvaluationTimeoutError)
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_generate_returns_empty_string_for_missing_content(mock_openai) -> None:
    mock_openai.return_value.chat.completions.create.return_value = _completion(None)
    client = AIClient(_config())

    assert await client.generate("instructions", "prompt", 0.3) == ""


@pytest.mark.asyncio
async def test_close_releases_client(mock_openai) -> None:
    client = AIClient(_config())
    await client.generate("instructions", "prompt", 0.3)

    await client.close()

    mock_openai.return_value.close.assert_awaited_once()
