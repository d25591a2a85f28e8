"""Tests for GeminiProvider with the SDK model stubbed out."""

import asyncio
from types import SimpleNamespace

import pytest

from niklaus.core.entities import SupportChat, TurnRole
from niklaus.core.exceptions import ConfigurationError, InferenceTimeoutError
from niklaus.infrastructure.llm.factory import get_inference_provider
from niklaus.infrastructure.llm.gemini import GeminiProvider, to_gemini_contents


class FakeModel:
    """Stand-in for genai.GenerativeModel."""

    def __init__(self, response=None, delay: float = 0):
        self.response = response
        self.delay = delay
        self.calls = []

    async def generate_content_async(self, contents, generation_config=None):
        self.calls.append(contents)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.response


class BlockedResponse:
    @property
    def text(self):
        raise ValueError("response was blocked")


@pytest.fixture
def transcript():
    chat = SupportChat().append(TurnRole.USER, "Oi")
    chat = chat.append(TurnRole.ASSISTANT, "Olá!")
    return chat.append(TurnRole.USER, "Qual o prazo?").turns


@pytest.fixture
def provider(monkeypatch) -> GeminiProvider:
    monkeypatch.setenv("INFERENCE_API_KEY", "test-key")
    monkeypatch.setenv("INFERENCE_MODEL_NAME", "models/gemini-2.5-flash")
    return GeminiProvider()


def test_contents_use_model_role(transcript):
    contents = to_gemini_contents(transcript)

    assert [c["role"] for c in contents] == ["user", "model", "user"]
    assert contents[-1]["parts"] == [{"text": "Qual o prazo?"}]


def test_requires_api_key(monkeypatch):
    monkeypatch.delenv("INFERENCE_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        GeminiProvider()


def test_model_name_normalized(provider):
    assert provider.model == "gemini-2.5-flash"


def test_unknown_provider_type():
    with pytest.raises(ValueError):
        get_inference_provider("openai")


@pytest.mark.asyncio
async def test_generate(provider, transcript, monkeypatch):
    model = FakeModel(SimpleNamespace(text="  Em até 5 dias.  "))
    monkeypatch.setattr(provider, "_get_model", lambda instruction: model)

    reply = await provider.generate(transcript, "sys")

    assert reply == "Em até 5 dias."
    assert len(model.calls) == 1
    assert len(model.calls[0]) == 3


@pytest.mark.asyncio
async def test_blocked_response_is_empty(provider, transcript, monkeypatch):
    monkeypatch.setattr(provider, "_get_model", lambda instruction: FakeModel(BlockedResponse()))
    assert await provider.generate(transcript, "sys") == ""


@pytest.mark.asyncio
async def test_timeout(provider, transcript, monkeypatch):
    provider.timeout = 0.01
    monkeypatch.setattr(provider, "_get_model", lambda instruction: FakeModel(delay=1))

    with pytest.raises(InferenceTimeoutError):
        await provider.generate(transcript, "sys")
