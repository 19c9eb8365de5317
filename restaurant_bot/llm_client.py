"""
Generation collaborator backed by the OpenAI chat completions API.

The engine treats this client strictly as an enhancement layer: every call is
bounded by a timeout, never retried, and any failure is reported as ``None``
so callers can fall back to their fixed texts.

The process entry point constructs one instance and injects it wherever it is
needed; nothing in this module creates a client at import time.
"""

import logging
from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from . import config

logger = logging.getLogger(__name__)


class GenerationClient:
    """
    Thin wrapper around ``OpenAI().chat.completions`` returning plain text.

    Usage:
        llm = GenerationClient(api_key="sk-...", model="gpt-4o-mini", timeout=10)
        text = llm.complete("Mensagem do cliente: oi", system="Você é ...")
        if text is None:
            ...  # use the fallback
    """

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        timeout: float = None,
        client: OpenAI = None,
    ):
        self.model = model or config.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else config.LLM_TIMEOUT_SECONDS
        if client is None:
            # max_retries=0: a slow backend must not stretch the turn beyond the timeout
            client = OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)
        self._client = client
        logger.debug("Generation client configured with model %s (timeout %.1fs)", self.model, self.timeout)

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> Optional[str]:
        """
        Send one prompt and return the stripped reply text.

        Returns None on timeouts, API errors and empty replies.
        """
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                timeout=self.timeout,
            )
        except OpenAIError as e:
            logger.warning("Generation call failed: %s", e)
            return None

        if not completion.choices:
            logger.warning("Generation call returned no choices")
            return None

        content = completion.choices[0].message.content
        if not content or not content.strip():
            return None
        return content.strip()


def build_generation_client() -> Optional[GenerationClient]:
    """
    Build the client from configuration, or return None when generation is disabled.
    """
    if not config.is_llm_enabled():
        logger.info("Generation collaborator disabled; replies will use fixed templates")
        return None
    return GenerationClient(
        api_key=config.OPENAI_API_KEY,
        model=config.OPENAI_MODEL,
        timeout=config.LLM_TIMEOUT_SECONDS,
    )
