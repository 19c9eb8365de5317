"""
Conversation Persistence
========================

Lookup-or-create of conversations by channel address and state updates.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import Conversation
from ..tasks.schemas import ConversationState

logger = logging.getLogger(__name__)


def get_or_create_conversation(db: Session, channel_address: str) -> Conversation:
    """
    Return the conversation for ``channel_address``, creating it in the
    initial state on first contact.
    """
    conversation = (
        db.query(Conversation)
        .filter(Conversation.channel_address == channel_address)
        .first()
    )
    if conversation:
        return conversation

    conversation = Conversation(
        channel_address=channel_address,
        state=ConversationState.INITIAL.value,
    )
    db.add(conversation)
    try:
        db.flush()
    except IntegrityError:
        # Another turn for the same address created it first; this runs before
        # anything else in the turn, so rolling back loses nothing
        db.rollback()
        logger.debug("Conversation for %s created concurrently; reloading", channel_address)
        conversation = (
            db.query(Conversation)
            .filter(Conversation.channel_address == channel_address)
            .one()
        )
    else:
        logger.info("New conversation #%d created", conversation.id)
    return conversation


def set_conversation_state(db: Session, conversation: Conversation, state: ConversationState) -> None:
    """Persist the next dialogue state (flushed, committed by the caller)."""
    if conversation.state != state.value:
        logger.debug("Conversation #%d: %s -> %s", conversation.id, conversation.state, state.value)
    conversation.state = state.value
    db.flush()
