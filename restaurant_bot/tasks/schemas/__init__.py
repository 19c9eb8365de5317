"""
State Machine Schemas.

This package contains the enums, dataclasses and Pydantic models shared by the
interpreter, the state machine, the ledger and the response composer.
"""

from .phases import ConversationState, OrderStatus, OPEN_ORDER_STATUSES
from .intents import (
    Intent,
    Interpretation,
    PaymentMethod,
    PAYMENT_INTENTS,
    PAYMENT_METHOD_INTENTS,
    PAYMENT_METHOD_LABELS,
)
from .context import ResponseContext
from .result import ReplySpec, TurnResult

__all__ = [
    # Phases
    "ConversationState",
    "OrderStatus",
    "OPEN_ORDER_STATUSES",
    # Intents
    "Intent",
    "Interpretation",
    "PaymentMethod",
    "PAYMENT_INTENTS",
    "PAYMENT_METHOD_INTENTS",
    "PAYMENT_METHOD_LABELS",
    # Replies
    "ResponseContext",
    "ReplySpec",
    "TurnResult",
]
