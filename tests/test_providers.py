# test_providers.py

import asyncio

import pytest

from conftest import FakeProvider
from travel_agent.services.providers import GeminiProvider, GroqProvider, ProviderChain
from travel_agent.utils.errors import AllProvidersFailedError, ProviderError


def test_first_successful_provider_wins():
    first = FakeProvider("gemini")
    second = FakeProvider("groq", "Hello from groq")
    third = FakeProvider("ollama", "Hello from ollama")
    chain = ProviderChain([first, second, third])

    assert asyncio.run(chain.generate("hi")) == "Hello from groq"
    assert first.prompts == ["hi"]
    assert third.prompts == []


def test_chain_raises_when_every_provider_fails():
    chain = ProviderChain([FakeProvider("gemini"), FakeProvider("groq")])
    with pytest.raises(AllProvidersFailedError) as excinfo:
        asyncio.run(chain.generate("hi"))

    assert [error.provider for error in excinfo.value.errors] == ["gemini", "groq"]
    assert isinstance(excinfo.value, ProviderError)


def test_unexpected_provider_exception_is_contained():
    class Exploding(FakeProvider):
        async def generate(self, prompt):
            raise RuntimeError("boom")

    chain = ProviderChain([Exploding("gemini"), FakeProvider("groq", "ok")])
    assert asyncio.run(chain.generate("hi")) == "ok"


def test_unconfigured_providers_fail_without_network():
    with pytest.raises(ProviderError, match="GEMINI_API_KEY"):
        asyncio.run(GeminiProvider(api_key=None).generate("hi"))
    with pytest.raises(ProviderError, match="GROQ_API_KEY"):
        asyncio.run(GroqProvider(api_key=None).generate("hi"))


def test_configured_providers():
    chain = ProviderChain([GeminiProvider(api_key=None), GroqProvider(api_key="key")])
    assert chain.configured_providers() == ["groq"]
