"""
Unified message processing for inbound customer messages.

This module provides the MessageProcessor class that runs one complete turn:
- Conversation lookup-or-create by channel address
- State machine processing (interpretation + ledger operations)
- Persisting the next state in the same transaction as the ledger changes
- Composing the outbound replies

Each turn uses its own session from the process-wide session factory and
commits exactly once. A failure anywhere in the turn rolls everything back,
so the stored state and the order ledger never disagree, and the customer
gets an apology instead of silence.

Replies are composed after the commit: no database lock is held while the
generation collaborator is writing text.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from . import config
from .logging_config import mask_address
from .services.conversation import get_or_create_conversation, set_conversation_state
from .services.menu import MenuCatalog
from .services.order import OrderLedger
from .tasks.composer import ResponseComposer
from .tasks.conversation_messages import ConversationMessages
from .tasks.schemas import ReplySpec
from .tasks.state_machine import DialogueStateMachine

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------

@dataclass
class ProcessingContext:
    """Input context for message processing."""
    channel_address: str
    user_message: str


@dataclass
class ProcessingResult:
    """Output from message processing."""
    replies: List[str] = field(default_factory=list)

    # None when the turn failed and nothing was persisted
    state: Optional[str] = None
    order_id: Optional[int] = None
    failed: bool = False


APOLOGY_REPLY = ReplySpec(
    step="error",
    fallback=ConversationMessages.APOLOGY,
    instruction="Houve um erro ao processar a mensagem. Peça desculpas e sugira tentar de novo ou mandar 'oi'.",
)


# -----------------------------------------------------------------------------
# MessageProcessor Class
# -----------------------------------------------------------------------------

class MessageProcessor:
    """
    Runs conversation turns against the database.

    Usage:
        processor = MessageProcessor(session_factory, machine, composer)
        result = processor.process(ProcessingContext(
            channel_address="+5511999990000",
            user_message="boa noite",
        ))
        for reply in result.replies:
            send(reply)
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        state_machine: DialogueStateMachine,
        composer: ResponseComposer,
        max_message_length: int = None,
    ):
        self.session_factory = session_factory
        self.state_machine = state_machine
        self.composer = composer
        self.max_message_length = max_message_length or config.MAX_MESSAGE_LENGTH

    def process(self, ctx: ProcessingContext) -> ProcessingResult:
        """
        Process one inbound message and return the replies to send, in order.
        """
        utterance = (ctx.user_message or "").strip()
        if len(utterance) > self.max_message_length:
            logger.info(
                "Truncating %d-character message from %s",
                len(utterance), mask_address(ctx.channel_address),
            )
            utterance = utterance[:self.max_message_length]

        db = self.session_factory()
        try:
            conversation = get_or_create_conversation(db, ctx.channel_address)
            turn = self.state_machine.process(
                conversation,
                utterance,
                OrderLedger(db),
                MenuCatalog(db),
            )
            set_conversation_state(db, conversation, turn.next_state)
            db.commit()
        except Exception:
            # Turn boundary: nothing of a failed turn is kept
            db.rollback()
            logger.exception("Turn failed for %s; changes rolled back", mask_address(ctx.channel_address))
            return ProcessingResult(
                replies=[self.composer.compose(APOLOGY_REPLY, utterance)],
                failed=True,
            )
        finally:
            db.close()

        replies = [self.composer.compose(reply, utterance) for reply in turn.replies]
        return ProcessingResult(
            replies=replies,
            state=turn.next_state.value,
            order_id=turn.order_id,
        )
