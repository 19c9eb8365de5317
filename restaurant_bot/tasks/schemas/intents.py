"""
Intent Definitions.

Closed set of classifications an utterance can receive, plus the payment
methods an utterance can resolve to.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Intent(str, Enum):
    """Meaning of an utterance within the current conversation state."""
    WANTS_MENU = "WANTS_MENU"
    VIEW_MENU_AGAIN = "VIEW_MENU_AGAIN"
    CANCEL = "CANCEL"
    DONE_SELECTING = "DONE_SELECTING"
    ITEM_SELECTION = "ITEM_SELECTION"
    DECLINE_DRINK = "DECLINE_DRINK"
    CONFIRM_YES = "CONFIRM_YES"
    CONFIRM_NO = "CONFIRM_NO"
    PAY_PIX = "PAY_PIX"
    PAY_CASH = "PAY_CASH"
    PAY_CARD = "PAY_CARD"
    UNKNOWN = "UNKNOWN"


class PaymentMethod(str, Enum):
    """Payment methods recorded on a placed order."""
    PIX = "Pix"
    CASH = "Cash"
    CARD = "Card"

    @property
    def label(self) -> str:
        """Customer-facing (pt-BR) name."""
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.PIX: "Pix",
    PaymentMethod.CASH: "Dinheiro",
    PaymentMethod.CARD: "Cartão",
}

PAYMENT_INTENTS = {
    Intent.PAY_PIX: PaymentMethod.PIX,
    Intent.PAY_CASH: PaymentMethod.CASH,
    Intent.PAY_CARD: PaymentMethod.CARD,
}

PAYMENT_METHOD_INTENTS = {method: intent for intent, method in PAYMENT_INTENTS.items()}


@dataclass
class Interpretation:
    """Result of interpreting one utterance.

    ``selections`` carries the extracted menu numbers when ``intent`` is
    ITEM_SELECTION and is empty otherwise.
    """
    intent: Intent
    selections: List[int] = field(default_factory=list)

    @property
    def payment_method(self) -> "PaymentMethod | None":
        return PAYMENT_INTENTS.get(self.intent)
