"""
Dialogue Engine for Order Taking.

This package provides the conversational core of the restaurant bot:
- Schemas: conversation states, intents, reply specifications
- Parsers: deterministic lexicons with an optional LLM classification fallback
- Interpreter: per-state utterance classification
- Composer: LLM-generated replies with fixed pt-BR fallbacks
- State machine: per-state transitions driving the order ledger

The state machine lives in ``restaurant_bot.tasks.state_machine`` and is
imported from there, since it depends on the persistence services.
"""

from .schemas import (
    ConversationState,
    OrderStatus,
    Intent,
    Interpretation,
    PaymentMethod,
    ResponseContext,
    ReplySpec,
    TurnResult,
)

from .interpreter import UtteranceInterpreter
from .composer import ResponseComposer
from .conversation_messages import ConversationMessages

__all__ = [
    "ConversationState",
    "OrderStatus",
    "Intent",
    "Interpretation",
    "PaymentMethod",
    "ResponseContext",
    "ReplySpec",
    "TurnResult",
    "UtteranceInterpreter",
    "ResponseComposer",
    "ConversationMessages",
]
