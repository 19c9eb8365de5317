"""
Parser Constants.

This module holds the lexicons used by the deterministic parsers, kept as data
tables so they can be tested and swapped without touching the state machine.

All patterns are case-insensitive and anchored on word boundaries. Python's
``re`` treats accented letters as word characters, so ``\\bnão\\b`` behaves
like ``\\bnao\\b``.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple

from ..schemas import ConversationState, Intent, PaymentMethod


# =============================================================================
# Lexicons
# =============================================================================

# "sim", "quero ver", "manda o cardápio"...
AFFIRMATION_PATTERN = re.compile(
    r"\b(sim|claro|quero|pode|mostra|mostrar|ver|manda|mandar|envia|enviar)\b",
    re.IGNORECASE,
)

# Negation always overrides affirmation
NEGATION_PATTERN = re.compile(r"\b(n[aã]o)\b", re.IGNORECASE)

# Customer finished picking items ("pronto", "é isso", "só isso")
COMPLETION_PATTERN = re.compile(
    r"\b(pronto|[ée] isso|quero esses|s[óo] isso|finalizar|acabei)\b",
    re.IGNORECASE,
)

# Customer does not want (more) drinks
DECLINE_PATTERN = re.compile(
    r"\b(n[aã]o|obrigad[oa]\s*(mas\s*)?n[aã]o|nada|dispenso)\b",
    re.IGNORECASE,
)

# Yes to "Está certo o seu pedido?"
CONFIRMATION_PATTERN = re.compile(
    r"\b(sim|claro|est[aá] certo|correto|confirmo|pode ser)\b",
    re.IGNORECASE,
)

# "1 e 3" -> "1 3"
CONNECTOR_PATTERN = re.compile(r"\s+e\s+", re.IGNORECASE)

NUMBER_PATTERN = re.compile(r"\d+")


# =============================================================================
# Payment Options
# =============================================================================

PAYMENT_OPTION_NUMBERS: Dict[int, PaymentMethod] = {
    1: PaymentMethod.PIX,
    2: PaymentMethod.CASH,
    3: PaymentMethod.CARD,
}

# Method names accepted as synonyms of the option numbers
PAYMENT_NAME_PATTERNS: List[Tuple[Pattern, PaymentMethod]] = [
    (re.compile(r"\bpix\b", re.IGNORECASE), PaymentMethod.PIX),
    (re.compile(r"\b(dinheiro|esp[ée]cie|cash)\b", re.IGNORECASE), PaymentMethod.CASH),
    (re.compile(r"\b(cart[aã]o|cr[ée]dito|d[ée]bito|card)\b", re.IGNORECASE), PaymentMethod.CARD),
]


# =============================================================================
# Rule Tables (lexicon -> intent, per state)
# =============================================================================

@dataclass(frozen=True)
class LexiconRule:
    """
    Map a lexicon match to an intent.

    ``blocked_by`` vetoes the rule when it also matches (negation overriding
    affirmation). ``requires_no_numbers`` vetoes the rule when the text
    carries numeric tokens, so "pronto, 1 e 2" is read as a selection.
    """
    intent: Intent
    pattern: Pattern
    blocked_by: Optional[Pattern] = None
    requires_no_numbers: bool = False


# Evaluated in order; the first rule that fires wins
STATE_RULES: Dict[ConversationState, List[LexiconRule]] = {
    ConversationState.AWAITING_MENU_CONSENT: [
        LexiconRule(Intent.WANTS_MENU, AFFIRMATION_PATTERN, blocked_by=NEGATION_PATTERN),
        # A refusal is an answer too; it never reaches the classifier
        LexiconRule(Intent.UNKNOWN, NEGATION_PATTERN),
    ],
    ConversationState.SELECTING_DISHES: [
        LexiconRule(Intent.DONE_SELECTING, COMPLETION_PATTERN, requires_no_numbers=True),
    ],
    ConversationState.SELECTING_DRINKS: [
        LexiconRule(Intent.DECLINE_DRINK, DECLINE_PATTERN),
        LexiconRule(Intent.DONE_SELECTING, COMPLETION_PATTERN, requires_no_numbers=True),
    ],
    ConversationState.CONFIRMING_ORDER: [
        LexiconRule(Intent.CONFIRM_NO, NEGATION_PATTERN),
        LexiconRule(Intent.CONFIRM_YES, CONFIRMATION_PATTERN, blocked_by=NEGATION_PATTERN),
    ],
}

# States where bare numbers mean menu item ids
ITEM_SELECTION_STATES = frozenset({
    ConversationState.SELECTING_DISHES,
    ConversationState.SELECTING_DRINKS,
})
