"""
Schemas Package for the Restaurant Bot
======================================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **messages.py**: Inbound message request and reply response

Usage:
------
    from restaurant_bot.schemas import InboundMessageRequest, InboundMessageResponse
"""

from .messages import InboundMessageRequest, InboundMessageResponse

__all__ = [
    "InboundMessageRequest",
    "InboundMessageResponse",
]
