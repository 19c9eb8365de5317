"""
Conversation and Order Status Definitions.

This module defines the enums persisted on Conversation.state and
Order.status. Both are stored as their string values.
"""

from enum import Enum


class ConversationState(str, Enum):
    """Where a conversation currently stands in the ordering dialogue."""
    INITIAL = "initial"
    AWAITING_MENU_CONSENT = "awaiting_menu_consent"
    SELECTING_DISHES = "selecting_dishes"
    SELECTING_DRINKS = "selecting_drinks"
    CONFIRMING_ORDER = "confirming_order"
    AWAITING_PAYMENT = "awaiting_payment"


class OrderStatus(str, Enum):
    """Lifecycle of an order. PLACED and CANCELLED are terminal."""
    BUILDING = "building"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    PLACED = "placed"
    CANCELLED = "cancelled"


OPEN_ORDER_STATUSES = (OrderStatus.BUILDING, OrderStatus.AWAITING_CONFIRMATION)
