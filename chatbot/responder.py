"""LLM-backed responder with a template fallback.

One chat-completions call per message, no retries. Any failure (HTTP
error, timeout, malformed body, missing API key) is answered by the
fallback composer instead, so callers always get text back.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import OpenAI

from salespage.models import ProductRecord

from .config import (
    APP_REFERER,
    APP_TITLE,
    LLM_MAX_TOKENS,
    LLM_MODEL,
    LLM_TEMPERATURE,
    LLM_TIMEOUT,
    LLM_TOP_P,
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
)
from .fallback import compose_fallback_reply, route_topic
from .logging_utils import log_interaction
from .prompts import build_system_prompt
from .timing import timer

__all__ = ["Reply", "RemoteResponder", "MalformedCompletionError", "REMOTE", "FALLBACK"]

logger = logging.getLogger(__name__)

REMOTE = "remote"
FALLBACK = "fallback"


@dataclass(frozen=True)
class Reply:
    """A reply plus where it came from."""

    text: str
    source: str
    model: Optional[str] = None
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.source == FALLBACK


class MalformedCompletionError(Exception):
    """The completion came back without usable message content."""
    pass


def _completion_text(completion: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion."""
    choices = getattr(completion, "choices", None)
    if not choices:
        raise MalformedCompletionError("completion has no choices")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise MalformedCompletionError("completion message has no content")
    return content.strip()


class RemoteResponder:
    """Answers chat messages about one product via OpenRouter."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OPENROUTER_BASE_URL,
        model: str = LLM_MODEL,
        timeout: float = LLM_TIMEOUT,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = OPENROUTER_API_KEY if api_key is None else api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def _fallback(self, message: str, record: ProductRecord, error: str) -> Reply:
        text = compose_fallback_reply(message, record)
        log_interaction(
            "fallback_reply",
            {"product_url": record.url, "topic": route_topic(message), "reason": error},
        )
        return Reply(text=text, source=FALLBACK, error=error)

    def generate(self, message: str, record: ProductRecord) -> Reply:
        """Answer ``message`` about ``record``; never raises.

        Args:
            message: Raw user message.
            record: Product the conversation is about.

        Returns:
            Reply tagged ``remote`` or ``fallback``.
        """
        if not self.enabled:
            return self._fallback(message, record, "OPENROUTER_API_KEY not configured")

        system_prompt = build_system_prompt(record)
        log_interaction(
            "llm_call",
            {"model": self.model, "product_url": record.url, "user_message": message},
        )

        try:
            with timer("llm_call"):
                completion = self._get_client().chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": message},
                    ],
                    temperature=LLM_TEMPERATURE,
                    max_tokens=LLM_MAX_TOKENS,
                    top_p=LLM_TOP_P,
                    extra_headers={"HTTP-Referer": APP_REFERER, "X-Title": APP_TITLE},
                )
            text = _completion_text(completion)
        except Exception as e:
            log_interaction("llm_error", {"model": self.model, "error": str(e)})
            logger.exception("Error calling OpenRouter, using fallback reply")
            return self._fallback(message, record, str(e))

        log_interaction("llm_response", {"model": self.model, "raw_response": text})
        return Reply(text=text, source=REMOTE, model=self.model)

    def respond(self, message: str, record: ProductRecord) -> str:
        """Text-only version of ``generate``."""
        return self.generate(message, record).text
