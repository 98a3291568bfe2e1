"""
AI Gateway
One outbound call per analysis / chat turn to Gemini via OpenRouter
(OpenAI-compatible chat completions API).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import httpx
from openai import APIError, AsyncOpenAI

from plantcare import config
from plantcare.errors import ConfigurationError, RequestFailure
from plantcare.models import ChatTurn, Citation
from plantcare.utils.image import EncodedImage

logger = logging.getLogger(__name__)


@dataclass
class GatewayConfig:
    api_key: str
    base_url: str = config.OPENROUTER_BASE_URL
    model: str = config.AI_MODEL
    timeout: float = config.API_TIMEOUT
    connect_timeout: float = config.API_CONNECT_TIMEOUT
    max_tokens: int = config.AI_MAX_TOKENS
    app_url: str = config.APP_URL
    app_title: str = config.APP_TITLE

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        if not config.OPENROUTER_API_KEY:
            raise ConfigurationError("OPENROUTER_API_KEY is not set")
        return cls(api_key=config.OPENROUTER_API_KEY)


@dataclass
class GatewayReply:
    text: str
    citations: List[Citation] = field(default_factory=list)


def _get(obj: Any, name: str) -> Any:
    """Read ``name`` from an SDK object or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_citations(message: Any) -> List[Citation]:
    """Collect url_citation annotations from a chat completion message."""
    citations = []
    for annotation in _get(message, "annotations") or []:
        if _get(annotation, "type") != "url_citation":
            continue
        cited = _get(annotation, "url_citation")
        citations.append(Citation(title=_get(cited, "title"), uri=_get(cited, "url")))
    return citations


class AIGateway:
    """Thin wrapper around the generative AI endpoint.

    Every call is independent and at-most-once: no retry, no cache.
    Library and network errors come back as ``RequestFailure``.
    """

    def __init__(self, gateway_config: GatewayConfig, client: Optional[AsyncOpenAI] = None):
        self.config = gateway_config
        self._http_client = None
        if client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=gateway_config.connect_timeout,
                    read=gateway_config.timeout,
                    write=gateway_config.timeout,
                    pool=gateway_config.timeout,
                )
            )
            client = AsyncOpenAI(
                base_url=gateway_config.base_url,
                api_key=gateway_config.api_key,
                http_client=self._http_client,
                max_retries=0,
            )
        self.client = client
        logger.info(f"AI gateway initialized ({gateway_config.model}, {gateway_config.timeout}s timeout)")

    async def close(self):
        if self._http_client is not None:
            await self._http_client.aclose()

    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        image: Optional[EncodedImage] = None,
        json_output: bool = False,
        web_search: bool = False,
    ) -> GatewayReply:
        """Send one prompt (optionally with an image) and return the reply text."""
        content: Any = prompt
        if image is not None:
            content = [
                {"type": "image_url", "image_url": {"url": image.data_url}},
                {"type": "text", "text": prompt},
            ]

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": content})

        options: Dict[str, Any] = {}
        if json_output:
            options["response_format"] = {"type": "json_object"}
        if web_search:
            # OpenRouter web search plugin; sources come back as url_citation annotations
            options["extra_body"] = {"plugins": [{"id": "web"}]}

        message = await self._complete(messages, **options)
        citations = extract_citations(message) if web_search else []
        return GatewayReply(text=message.content, citations=citations)

    async def chat(self, system_instruction: str, history: Sequence[ChatTurn], message: str) -> str:
        """Send a chat turn with the full prior transcript; return the assistant reply."""
        messages = [{"role": "system", "content": system_instruction}]
        for turn in history:
            role = "assistant" if turn.role == "model" else "user"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": message})

        reply = await self._complete(messages)
        return reply.content

    async def _complete(self, messages: List[Dict[str, Any]], **options) -> Any:
        try:
            response = await self.client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                max_tokens=self.config.max_tokens,
                extra_headers={
                    "HTTP-Referer": self.config.app_url,
                    "X-Title": self.config.app_title,
                },
                **options,
            )
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"AI request failed: {type(e).__name__}: {e}", exc_info=True)
            raise RequestFailure(details={"reason": type(e).__name__}) from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            logger.error("AI request returned no choices")
            raise RequestFailure(details={"reason": "empty_response"})

        message = choices[0].message
        text = message.content if message is not None else None
        if not isinstance(text, str) or not text.strip():
            logger.error("AI request returned an empty payload")
            raise RequestFailure(details={"reason": "empty_response"})
        return message
