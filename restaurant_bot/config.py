"""
Configuration Module for the Restaurant Bot
===========================================

This module centralizes the environment variables and defaults used by the
order-taking engine and its entry point. Values are read once at import time;
the entry point calls ``load_dotenv()`` before importing this module so a
local ``.env`` file is honoured.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the conversation/order/menu store.

- **Generation (LLM)**: OpenAI credentials, model name and the per-call
  timeout. The generation collaborator is optional; when it is disabled the
  engine replies with its fixed pt-BR templates only.

- **Input Validation**: Maximum accepted utterance length.

- **Branding**: Name the bot signs with.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./restaurant_bot.db")
- OPENAI_API_KEY: OpenAI key; generation is disabled when empty
- OPENAI_MODEL: Chat model (default: "gpt-4o-mini")
- LLM_ENABLED: Set to "false" to force template-only replies (default: "true")
- LLM_TIMEOUT_SECONDS: Upper bound for one generation call (default: 10)
- MAX_MESSAGE_LENGTH: Max accepted utterance length (default: 1000)
- RESTAURANT_NAME: Name used in the generation persona (default: "Restaurante")

Usage:
------
    from restaurant_bot.config import DATABASE_URL, is_llm_enabled
"""

import os


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./restaurant_bot.db")


# =============================================================================
# Generation (LLM) Configuration
# =============================================================================
# The generation collaborator is treated as unreliable: every call is bounded
# by LLM_TIMEOUT_SECONDS and is never retried inside a turn.

OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_ENABLED: bool = os.getenv("LLM_ENABLED", "true").strip().lower() not in {"0", "false", "no"}
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "10"))


def is_llm_enabled() -> bool:
    """
    Return True when the generation collaborator should be constructed.

    Both an API key and the LLM_ENABLED flag are required.
    """
    return LLM_ENABLED and bool(OPENAI_API_KEY)


# =============================================================================
# Input Validation Configuration
# =============================================================================

# Longer utterances are truncated before interpretation
MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "1000"))


# =============================================================================
# Branding
# =============================================================================

RESTAURANT_NAME: str = os.getenv("RESTAURANT_NAME", "Restaurante")
