"""
AI Providers - thin pass-through clients for third-party text/image APIs.

The proxy does not interpret replies: the first text a provider returns is
relayed back to the caller as-is. HTTP providers share one httpx.AsyncClient
owned by the caller (the API layer opens one per request); anthropic goes
through its SDK client.

Supported providers:
- openai          Chat Completions (+ DALL-E image generation)
- anthropic       Messages API via the official SDK
- mistral         Chat Completions compatible
- together        Chat Completions compatible
- ollama          /api/generate style endpoint (local, no key)
- llama-maverick  /api/generate style endpoint, optional bearer key
- custom          any endpoint taking {model, prompt} and returning response/content/text
"""

import time
from typing import Any, Dict, List, Optional, Type

import httpx
from anthropic import AsyncAnthropic, APIConnectionError, APIError, APIStatusError

from apkstudio.core.config import settings
from apkstudio.core.exceptions import AIProviderConfigError, AIServiceError, UnknownAIProviderError
from apkstudio.core.logging_config import logger
from apkstudio.schemas.ai import AIRequestType, ProviderConfig


CODE_SYSTEM_PROMPT = (
    "You are a Python specialist. Review code for bugs, performance issues and risky patterns, "
    "and suggest safer implementations. Focus on packaging Python apps as Android APKs."
)
CHAT_SYSTEM_PROMPT = (
    "You are an AI assistant specialized in Python development and Python-to-APK packaging. "
    "Give concise, practical advice."
)


def system_prompt_for(request_type: AIRequestType) -> str:
    """Code reviews get the code prompt; chat and image prompts share the chat prompt"""
    if request_type == AIRequestType.CODE:
        return CODE_SYSTEM_PROMPT
    return CHAT_SYSTEM_PROMPT


def bearer_headers(api_key: Optional[str]) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


class AIProvider:
    """Base provider: config checks, timing/logging and upstream error mapping"""

    name: str = ""
    display_name: str = ""
    default_model: Optional[str] = None
    requires_api_key: bool = True

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def complete(self, content: str, system_prompt: str, config: ProviderConfig) -> str:
        """Send one prompt upstream and return the reply text"""
        self.check_config(config)
        model = config.model or self.default_model

        start = time.perf_counter()
        try:
            reply = await self._complete(content, system_prompt, config, model)
        except AIServiceError as e:
            logger.log_provider_call(
                self.name, model, (time.perf_counter() - start) * 1000,
                success=False, upstream_status=e.details.get("upstream_status"),
            )
            raise

        logger.log_provider_call(self.name, model, (time.perf_counter() - start) * 1000)
        return reply

    def check_config(self, config: ProviderConfig) -> None:
        if self.requires_api_key and not config.api_key:
            raise AIProviderConfigError(self.name, f"{self.display_name} API key required")

    async def _complete(
        self, content: str, system_prompt: str, config: ProviderConfig, model: Optional[str]
    ) -> str:
        raise NotImplementedError

    async def _post_json(
        self, url: str, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        try:
            response = await self.client.post(url, json=payload, headers=headers or {})
        except httpx.HTTPError as e:
            raise AIServiceError(self.name, f"{self.display_name} API request failed: {e}") from e

        if response.is_error:
            raise AIServiceError(
                self.name,
                f"{self.display_name} API error: {response.status_code} - {response.text}",
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise AIServiceError(
                self.name, f"{self.display_name} API returned invalid JSON", upstream_status=response.status_code
            ) from e

    def _no_response(self) -> str:
        return f"No response from {self.display_name}"


class ChatCompletionsProvider(AIProvider):
    """OpenAI-compatible /chat/completions APIs"""

    url: str = ""

    async def _complete(self, content, system_prompt, config, model):
        data = await self._post_json(
            self.url,
            {
                "model": model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": content},
                ],
                "max_tokens": settings.AI_MAX_TOKENS,
                "temperature": settings.AI_TEMPERATURE,
            },
            headers=bearer_headers(config.api_key),
        )
        choices = data.get("choices") or []
        message = (choices[0] or {}).get("message") or {} if choices else {}
        return message.get("content") or self._no_response()


class OpenAIProvider(ChatCompletionsProvider):
    name = "openai"
    display_name = "OpenAI"
    default_model = "gpt-4"
    url = "https://api.openai.com/v1/chat/completions"
    image_url = "https://api.openai.com/v1/images/generations"

    async def generate_image(self, prompt: str, config: ProviderConfig) -> str:
        """Generate one image and return its URL ('' if none came back)"""
        if not config.api_key:
            raise AIProviderConfigError(self.name, "OpenAI API key required for image generation")

        start = time.perf_counter()
        data = await self._post_json(
            self.image_url,
            {
                "model": settings.OPENAI_IMAGE_MODEL,
                "prompt": prompt,
                "n": 1,
                "size": settings.OPENAI_IMAGE_SIZE,
                "quality": "standard",
            },
            headers=bearer_headers(config.api_key),
        )
        logger.log_provider_call(
            self.name, settings.OPENAI_IMAGE_MODEL, (time.perf_counter() - start) * 1000, kind="image"
        )

        images = data.get("data") or []
        return (images[0] or {}).get("url", "") if images else ""


class MistralProvider(ChatCompletionsProvider):
    name = "mistral"
    display_name = "Mistral"
    default_model = "mistral-large-latest"
    url = "https://api.mistral.ai/v1/chat/completions"


class TogetherProvider(ChatCompletionsProvider):
    name = "together"
    display_name = "Together AI"
    default_model = "mistralai/Mixtral-8x7B-Instruct-v0.1"
    url = "https://api.together.xyz/v1/chat/completions"


class GenerateEndpointProvider(AIProvider):
    """Ollama-style /api/generate endpoints taking a single flattened prompt"""

    requires_api_key = False
    sends_api_key = True

    async def _complete(self, content, system_prompt, config, model):
        endpoint = config.endpoint or settings.OLLAMA_DEFAULT_ENDPOINT
        headers = bearer_headers(config.api_key) if self.sends_api_key else {}
        data = await self._post_json(
            endpoint,
            {
                "model": model,
                "prompt": f"{system_prompt}\n\nUser: {content}\nAssistant:",
                "stream": False,
                "options": {
                    "temperature": settings.AI_TEMPERATURE,
                    "top_p": settings.AI_TOP_P,
                    "max_tokens": settings.AI_MAX_TOKENS,
                },
            },
            headers=headers,
        )
        return data.get("response") or data.get("content") or self._no_response()


class LlamaMaverickProvider(GenerateEndpointProvider):
    name = "llama-maverick"
    display_name = "LLaMA Maverick"
    default_model = "maverick-4"


class OllamaProvider(GenerateEndpointProvider):
    name = "ollama"
    display_name = "Ollama"
    default_model = "llama2-uncensored"
    sends_api_key = False


class CustomProvider(AIProvider):
    """User-supplied endpoint; the endpoint URL is mandatory, the key optional"""

    name = "custom"
    display_name = "custom AI"
    requires_api_key = False

    def check_config(self, config: ProviderConfig) -> None:
        if not config.endpoint:
            raise AIProviderConfigError(self.name, "Custom endpoint URL required")

    async def _complete(self, content, system_prompt, config, model):
        data = await self._post_json(
            config.endpoint,
            {
                "model": model,
                "prompt": f"{system_prompt}\n\nUser: {content}\nAssistant:",
                "max_tokens": settings.AI_MAX_TOKENS,
                "temperature": settings.AI_TEMPERATURE,
            },
            headers=bearer_headers(config.api_key),
        )
        return data.get("response") or data.get("content") or data.get("text") or self._no_response()


class AnthropicProvider(AIProvider):
    """Anthropic Messages API through the official SDK"""

    name = "anthropic"
    display_name = "Anthropic"
    default_model = "claude-3-sonnet-20240229"

    async def _complete(self, content, system_prompt, config, model):
        client = AsyncAnthropic(
            api_key=config.api_key,
            max_retries=0,
            timeout=settings.AI_REQUEST_TIMEOUT,
        )
        try:
            message = await client.messages.create(
                model=model,
                max_tokens=settings.AI_MAX_TOKENS,
                system=system_prompt,
                messages=[{"role": "user", "content": content}],
            )
        except APIStatusError as e:
            raise AIServiceError(
                self.name, f"Anthropic API error: {e.status_code} - {e.message}", upstream_status=e.status_code
            ) from e
        except (APIConnectionError, APIError) as e:
            raise AIServiceError(self.name, f"Anthropic API request failed: {e}") from e

        for block in message.content:
            text = getattr(block, "text", None)
            if text:
                return text
        return self._no_response()


PROVIDERS: Dict[str, Type[AIProvider]] = {
    provider.name: provider
    for provider in (
        LlamaMaverickProvider,
        MistralProvider,
        OllamaProvider,
        TogetherProvider,
        OpenAIProvider,
        AnthropicProvider,
        CustomProvider,
    )
}


def supported_providers() -> List[str]:
    return list(PROVIDERS)


def get_provider(name: Optional[str], client: httpx.AsyncClient) -> AIProvider:
    """Instantiate the provider registered under `name`"""
    provider_cls = PROVIDERS.get(name or "")
    if provider_cls is None:
        raise UnknownAIProviderError(name, supported_providers())
    return provider_cls(client)
