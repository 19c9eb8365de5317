"""
Parsers Package.

This package contains the parsing functions and lexicons used by the
utterance interpreter.

Exports:
- Constants: Lexicon patterns, payment options, per-state rule tables
- Deterministic Parsers: Regex-based parsing functions
- LLM Parsers: Closed-label classification through the generation client
"""

from .constants import (
    AFFIRMATION_PATTERN,
    NEGATION_PATTERN,
    COMPLETION_PATTERN,
    DECLINE_PATTERN,
    CONFIRMATION_PATTERN,
    PAYMENT_OPTION_NUMBERS,
    PAYMENT_NAME_PATTERNS,
    LexiconRule,
    STATE_RULES,
    ITEM_SELECTION_STATES,
)

from .deterministic import (
    extract_numbers,
    parse_payment_method_deterministic,
    parse_utterance_deterministic,
)

from .llm_parsers import (
    INTENT_LABELS,
    INTENT_CLASSIFIER_PROMPT,
    parse_intent_label,
    classify_intent,
)

__all__ = [
    # Constants
    "AFFIRMATION_PATTERN",
    "NEGATION_PATTERN",
    "COMPLETION_PATTERN",
    "DECLINE_PATTERN",
    "CONFIRMATION_PATTERN",
    "PAYMENT_OPTION_NUMBERS",
    "PAYMENT_NAME_PATTERNS",
    "LexiconRule",
    "STATE_RULES",
    "ITEM_SELECTION_STATES",
    # Deterministic
    "extract_numbers",
    "parse_payment_method_deterministic",
    "parse_utterance_deterministic",
    # LLM
    "INTENT_LABELS",
    "INTENT_CLASSIFIER_PROMPT",
    "parse_intent_label",
    "classify_intent",
]
