"""
Text-generation providers and the first-success provider chain
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiohttp

from config import (
    GEMINI_API_KEY,
    GEMINI_MODEL,
    GROQ_API_KEY,
    GROQ_MODEL,
    OLLAMA_HOST,
    OLLAMA_MODEL,
)
from ..config.settings import LLM_SETTINGS
from ..utils.errors import ProviderError, AllProvidersFailedError

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """One text-generation backend: generate(prompt) -> text, ProviderError on failure"""

    name: str = "provider"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or LLM_SETTINGS["timeout"]

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        pass

    def is_configured(self) -> bool:
        return True

    async def _post_json(self, url: str, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """POST and return the decoded body; every failure becomes ProviderError"""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    headers=headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        body = await response.text()
                        raise ProviderError(self.name, f"HTTP {response.status}: {body[:200]}")
                    return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise ProviderError(self.name, f"timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise ProviderError(self.name, f"request failed: {e}")
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON: {e}")

    def _require_text(self, text: Any) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ProviderError(self.name, "empty response")
        return text.strip()


class GeminiProvider(BaseProvider):
    """Google Gemini generateContent REST API"""

    name = "gemini"

    def __init__(self, api_key: Optional[str] = GEMINI_API_KEY, model: str = GEMINI_MODEL, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.api_key = api_key
        self.model = model

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "GEMINI_API_KEY not configured")

        url = LLM_SETTINGS["gemini_api_url"].format(model=self.model)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        data = await self._post_json(url, payload, headers={"x-goog-api-key": self.api_key})

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(self.name, "unexpected response shape")
        return self._require_text(text)


class GroqProvider(BaseProvider):
    """Groq OpenAI-compatible chat completions"""

    name = "groq"

    def __init__(self, api_key: Optional[str] = GROQ_API_KEY, model: str = GROQ_MODEL, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.api_key = api_key
        self.model = model

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "GROQ_API_KEY not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": LLM_SETTINGS["max_tokens"],
            "temperature": LLM_SETTINGS["temperature"],
        }
        data = await self._post_json(LLM_SETTINGS["groq_api_url"], payload, headers=headers)

        try:
            text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(self.name, "unexpected response shape")
        return self._require_text(text)


class OllamaProvider(BaseProvider):
    """Local Ollama /api/generate"""

    name = "ollama"

    def __init__(self, host: str = OLLAMA_HOST, model: str = OLLAMA_MODEL, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.host = (host or "").rstrip("/")
        self.model = model

    def is_configured(self) -> bool:
        return bool(self.host)

    async def generate(self, prompt: str) -> str:
        if not self.host:
            raise ProviderError(self.name, "OLLAMA_HOST not configured")

        payload = {"model": self.model, "prompt": prompt, "stream": False}
        data = await self._post_json(f"{self.host}/api/generate", payload)

        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected response shape")
        return self._require_text(data.get("response"))


class ProviderChain:
    """Tries providers strictly in order; the first success wins"""

    def __init__(self, providers: Optional[List[BaseProvider]] = None):
        self.providers = providers if providers is not None else [
            GeminiProvider(),
            GroqProvider(),
            OllamaProvider(),
        ]
        logger.info(f"✅ ProviderChain initialized: {', '.join(self.configured_providers()) or 'none configured'}")

    def configured_providers(self) -> List[str]:
        return [provider.name for provider in self.providers if provider.is_configured()]

    async def generate(self, prompt: str) -> str:
        """Text from the first provider that succeeds, else AllProvidersFailedError"""
        errors: List[ProviderError] = []
        preview = prompt[:LLM_SETTINGS["log_prompt_chars"]]

        for provider in self.providers:
            try:
                logger.info(f"🤖 Trying {provider.name} for prompt: {preview!r}...")
                text = await provider.generate(prompt)
                logger.info(f"✅ {provider.name} responded ({len(text)} chars)")
                return text
            except ProviderError as e:
                logger.warning(f"❌ {e}")
                errors.append(e)
            except Exception as e:
                logger.error(f"❌ {provider.name} raised unexpectedly: {e}", exc_info=True)
                errors.append(ProviderError(provider.name, str(e)))

        raise AllProvidersFailedError(errors)
