"""
Message Routes for the Restaurant Bot
=====================================

The single customer-facing endpoint of the engine.

Endpoints:
----------
- POST /messages: Process one inbound message and return the replies

Conversation Flow:
------------------
1. The gateway posts the customer's address and message text
2. The MessageProcessor runs one turn (interpret, update ledger, next state)
3. The replies come back in order; the gateway sends them as-is

The route is a plain ``def`` so FastAPI runs it in its threadpool; turns for
different customers proceed in parallel, each with its own database session.
"""

import logging

from fastapi import APIRouter, Request

from ..message_processor import MessageProcessor, ProcessingContext
from ..schemas.messages import InboundMessageRequest, InboundMessageResponse

logger = logging.getLogger(__name__)

messages_router = APIRouter(tags=["Messages"])


@messages_router.post("/messages", response_model=InboundMessageResponse)
def post_message(request: Request, req: InboundMessageRequest) -> InboundMessageResponse:
    """Process one customer message and return the replies to send."""
    processor: MessageProcessor = request.app.state.processor
    result = processor.process(ProcessingContext(
        channel_address=req.channel_address,
        user_message=req.text,
    ))
    return InboundMessageResponse(
        replies=result.replies,
        state=result.state,
        order_id=result.order_id,
    )
