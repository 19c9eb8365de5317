"""
State Machine Result.

Defines the reply specifications and the per-turn result produced by the
dialogue state machine.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .context import ResponseContext
from .phases import ConversationState


@dataclass
class ReplySpec:
    """Semantic content of one outbound message.

    ``fallback`` is the complete literal reply; ``step`` and ``instruction``
    only guide the generation collaborator. When ``literal`` is set the text
    is sent as-is without consulting the generator (used for receipts).
    """
    step: str
    fallback: str
    instruction: str = ""
    context: ResponseContext = field(default_factory=ResponseContext)
    literal: bool = False


@dataclass
class TurnResult:
    """Result from processing one utterance."""
    next_state: ConversationState
    replies: List[ReplySpec]
    order_id: Optional[int] = None
