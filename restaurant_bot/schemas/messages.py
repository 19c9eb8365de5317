"""
Message Schemas for the Restaurant Bot
======================================

Pydantic models for the inbound message endpoint. The transport in front of
the engine (a WhatsApp gateway, a test harness) posts one customer message
and relays the returned replies, in order, to the same address.

Endpoint Coverage:
------------------
- POST /messages: Process one inbound message

Validation:
-----------
- channel_address must be non-empty; it is the conversation key.
- text may be empty (a bare media message still advances the dialogue).
  Texts longer than MAX_MESSAGE_LENGTH are truncated by the processor rather
  than rejected, so the customer always gets a reply.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class InboundMessageRequest(BaseModel):
    """
    One customer message.

    Attributes:
        channel_address: Remote party identifier (e.g. "+5511999990000")
        text: Message body as received
    """
    channel_address: str = Field(..., min_length=1)
    text: str = ""


class InboundMessageResponse(BaseModel):
    """
    Replies for one customer message.

    Attributes:
        replies: Messages to send back, in order (never empty)
        state: Conversation state after the turn; None if the turn failed
        order_id: Order touched by the turn, if any
    """
    replies: List[str]
    state: Optional[str] = None
    order_id: Optional[int] = None
