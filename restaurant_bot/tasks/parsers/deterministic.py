"""
Deterministic Parsing Functions (no LLM).

This module contains the regex-based parsing functions used for the common
inputs of every conversation state: menu numbers, "sim"/"não", "pronto",
and payment options. They are fast, free and reproducible, so the
interpreter always tries them before consulting the generation collaborator.
"""

import logging
from typing import List, Optional

from ..schemas import (
    ConversationState,
    Intent,
    Interpretation,
    PaymentMethod,
    PAYMENT_METHOD_INTENTS,
)
from .constants import (
    CONNECTOR_PATTERN,
    NUMBER_PATTERN,
    PAYMENT_OPTION_NUMBERS,
    PAYMENT_NAME_PATTERNS,
    STATE_RULES,
    ITEM_SELECTION_STATES,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Numbers
# =============================================================================

def extract_numbers(text: str) -> List[int]:
    """
    Extract menu numbers from free text.

    "1 e 3", "1, 3" and "quero o 1 e o 3" all yield [1, 3]. Numbers are
    returned in order of first appearance, without duplicates.
    """
    if not text:
        return []
    normalized = CONNECTOR_PATTERN.sub(" ", text)
    numbers: List[int] = []
    for token in NUMBER_PATTERN.findall(normalized):
        number = int(token)
        if number not in numbers:
            numbers.append(number)
    return numbers


# =============================================================================
# Payment
# =============================================================================

def parse_payment_method_deterministic(text: str) -> Optional[PaymentMethod]:
    """
    Resolve a payment method from an option number or a method name.

    Names win over numbers ("2 no pix" is Pix). A number only counts when it
    is the only number in the message, so "1 ou 2" stays unresolved.
    """
    if not text:
        return None

    for pattern, method in PAYMENT_NAME_PATTERNS:
        if pattern.search(text):
            return method

    numbers = extract_numbers(text)
    if len(numbers) == 1:
        return PAYMENT_OPTION_NUMBERS.get(numbers[0])
    return None


# =============================================================================
# Per-State Entry Point
# =============================================================================

def parse_utterance_deterministic(state: ConversationState, text: str) -> Optional[Interpretation]:
    """
    Classify an utterance with lexicons only.

    Returns None when no deterministic rule applies, so the caller can try
    the generation collaborator.
    """
    text = (text or "").strip()
    if not text:
        return None

    if state == ConversationState.AWAITING_PAYMENT:
        method = parse_payment_method_deterministic(text)
        if method is None:
            return None
        return Interpretation(intent=PAYMENT_METHOD_INTENTS[method])

    numbers = extract_numbers(text)

    for rule in STATE_RULES.get(state, []):
        if rule.requires_no_numbers and numbers:
            continue
        if rule.blocked_by is not None and rule.blocked_by.search(text):
            continue
        if rule.pattern.search(text):
            logger.debug("Deterministic match in %s: %s", state.value, rule.intent.value)
            return Interpretation(intent=rule.intent)

    if state in ITEM_SELECTION_STATES and numbers:
        return Interpretation(intent=Intent.ITEM_SELECTION, selections=numbers)

    return None
