"""
LLM-Powered Parsers.

Fallback classification for utterances the deterministic lexicons could not
place. The generation collaborator is asked for a single label from a closed
set; anything it returns outside that set collapses to UNKNOWN.
"""

import logging
from typing import List, Optional

from ...llm_client import GenerationClient
from ..schemas import ConversationState, Intent

logger = logging.getLogger(__name__)


# Order matters only when a reply names more than one label
INTENT_LABELS: List[Intent] = [
    Intent.WANTS_MENU,
    Intent.VIEW_MENU_AGAIN,
    Intent.CANCEL,
    Intent.DONE_SELECTING,
    Intent.ITEM_SELECTION,
    Intent.DECLINE_DRINK,
    Intent.CONFIRM_YES,
    Intent.CONFIRM_NO,
    Intent.PAY_PIX,
    Intent.PAY_CASH,
    Intent.PAY_CARD,
    Intent.UNKNOWN,
]

INTENT_CLASSIFIER_PROMPT = """Você classifica mensagens de clientes de um restaurante que atende pelo WhatsApp.

Etapa atual da conversa: {state}
Mensagem do cliente: "{utterance}"

Escolha UM rótulo da lista abaixo:
- WANTS_MENU: quer ver o cardápio ("sim", "quero", "pode mostrar", "me manda o cardápio")
- VIEW_MENU_AGAIN: pede o cardápio de novo ("mostra de novo", "quero ver o cardápio novamente")
- CANCEL: quer desistir ou encerrar ("não quero mais", "cancela", "deixa pra lá", "sair")
- DONE_SELECTING: terminou de escolher ("pronto", "é isso", "só isso")
- ITEM_SELECTION: informa números de itens ("1 2", "quero o 1 e o 3")
- DECLINE_DRINK: não quer bebida ("não", "não quero", "obrigado, não")
- CONFIRM_YES: confirma que o pedido está certo ("sim", "está certo", "confirmo")
- CONFIRM_NO: diz que o pedido não está certo ("não", "errado")
- PAY_PIX: vai pagar com Pix ("pix", "1")
- PAY_CASH: vai pagar em dinheiro ("dinheiro", "2")
- PAY_CARD: vai pagar com cartão ("cartão", "3")
- UNKNOWN: nenhuma das opções acima

Responda somente com o rótulo, sem mais nada."""


def parse_intent_label(reply: Optional[str]) -> Intent:
    """Map a free-text classifier reply onto the closed label set."""
    if not reply:
        return Intent.UNKNOWN
    normalized = reply.strip().upper()
    for intent in INTENT_LABELS:
        if intent.value in normalized:
            return intent
    return Intent.UNKNOWN


def classify_intent(
    llm: Optional[GenerationClient],
    state: ConversationState,
    utterance: str,
) -> Intent:
    """
    Ask the generation collaborator to classify an utterance.

    Returns UNKNOWN when there is no collaborator, the utterance is blank,
    or the call fails or times out.
    """
    if llm is None or not utterance or not utterance.strip():
        return Intent.UNKNOWN

    prompt = INTENT_CLASSIFIER_PROMPT.format(
        state=state.value,
        utterance=utterance.strip(),
    )
    try:
        reply = llm.complete(prompt, temperature=0.0)
    except Exception as e:
        logger.warning("Intent classification failed in %s: %s", state.value, e)
        return Intent.UNKNOWN
    intent = parse_intent_label(reply)
    logger.debug("LLM classified %r in %s as %s", utterance, state.value, intent.value)
    return intent
