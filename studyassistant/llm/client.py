import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
import openai
from openai import OpenAI

from studyassistant.config import Settings
from studyassistant.errors import (
    GenerationFailedError,
    GenerationTimeoutError,
    GenerationUnavailableError,
    MalformedGenerationOutputError,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_KEYS = {"", "your-openai-api-key-here", "sk-your-openai-api-key-here"}


@dataclass
class GenerationOptions:
    temperature: float = 0.7
    max_tokens: int = 1500


class GenerationBackend(Protocol):
    name: str

    def complete(self, system: str, user: str, options: GenerationOptions) -> str: ...


class OpenAIBackend:
    name = "openai"

    def __init__(self, api_key: str, model: str, timeout: float, base_url: str | None = None):
        self.model = model
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def complete(self, system: str, user: str, options: GenerationOptions) -> str:
        try:
            r = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": system},
                          {"role": "user", "content": user}],
                temperature=options.temperature,
                max_tokens=options.max_tokens,
            )
        except openai.APITimeoutError as e:
            raise GenerationTimeoutError("Text generation timed out") from e
        except openai.APIConnectionError as e:
            raise GenerationUnavailableError("Text generation service is unreachable") from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise GenerationUnavailableError("Text generation service rejected the configured credentials") from e
        except openai.APIError as e:
            raise GenerationFailedError("Text generation request failed", context={"error": str(e)}) from e
        if not r.choices:
            raise MalformedGenerationOutputError("Text generation returned no choices")
        return r.choices[0].message.content or ""


class OllamaBackend:
    """Locally hosted model server speaking the Ollama /api/chat protocol."""

    name = "ollama"

    def __init__(self, base_url: str, model: str, timeout: float, transport: httpx.BaseTransport | None = None):
        self.model = model
        self.http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def complete(self, system: str, user: str, options: GenerationOptions) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "system", "content": system},
                         {"role": "user", "content": user}],
            "stream": False,
            "options": {"temperature": options.temperature, "num_predict": options.max_tokens},
        }
        try:
            r = self.http.post("/api/chat", json=payload)
            r.raise_for_status()
        except httpx.TimeoutException as e:
            raise GenerationTimeoutError("Text generation timed out") from e
        except httpx.ConnectError as e:
            raise GenerationUnavailableError("Text generation service is unreachable") from e
        except httpx.HTTPStatusError as e:
            raise GenerationFailedError(
                "Text generation request failed",
                context={"status": e.response.status_code},
            ) from e
        except httpx.TransportError as e:
            raise GenerationFailedError("Text generation request failed", context={"error": str(e)}) from e
        try:
            data = r.json()
        except ValueError as e:
            raise MalformedGenerationOutputError("Text generation returned a non-JSON response") from e
        message = data.get("message") if isinstance(data, dict) else None
        return (message or {}).get("content", "")


class GenerationClient:
    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    def complete(self, system: str, user: str, options: GenerationOptions | None = None) -> str:
        options = options or GenerationOptions()
        try:
            text = self.backend.complete(system, user, options)
        except (GenerationTimeoutError, GenerationUnavailableError, GenerationFailedError) as e:
            logger.error(f"{self.backend.name} generation failed: {e.message} {e.context}")
            raise
        text = (text or "").strip()
        if not text:
            raise MalformedGenerationOutputError("Text generation returned an empty response")
        return text


def build_generation_client(settings: Settings) -> GenerationClient:
    """Build the configured backend, failing at startup rather than mid-request."""
    provider = (settings.llm_provider or "").lower()
    if provider == "openai":
        key = settings.openai_api_key
        if not key or key.strip() in PLACEHOLDER_KEYS:
            raise GenerationUnavailableError("OpenAI API key is not configured (set OPENAI_API_KEY)")
        backend = OpenAIBackend(key, settings.llm_model, settings.llm_timeout_seconds, settings.openai_base_url)
    elif provider == "ollama":
        if not settings.ollama_base_url:
            raise GenerationUnavailableError("OLLAMA_BASE_URL is not configured")
        backend = OllamaBackend(settings.ollama_base_url, settings.llm_model, settings.llm_timeout_seconds)
    else:
        raise GenerationUnavailableError(f"Unknown LLM_PROVIDER '{settings.llm_provider}'")
    logger.info(f"Generation backend ready: {backend.name} ({settings.llm_model})")
    return GenerationClient(backend)
