"""
Response Composer.

Turns the reply specifications produced by the state machine into the text
actually sent to the customer.

When a generation collaborator is configured, each reply is rewritten in a
warm WhatsApp tone from the step name, the guidance and the structured
context. The collaborator never sees anything beyond those fields and is
told not to invent prices, dishes or other data. When it is absent, fails,
or returns nothing, the fixed fallback text is sent instead, so every reply
is delivered either way.
"""

import logging
from typing import List, Optional

from .. import config
from ..llm_client import GenerationClient
from .schemas import ReplySpec, ResponseContext

logger = logging.getLogger(__name__)


PERSONA_PROMPT = """Você é o atendente virtual do restaurante {restaurant_name} e conversa com clientes pelo WhatsApp.
Fale de forma cordial e humana, como um atendente de verdade.

Regras:
- Responda sempre em português do Brasil, com mensagens curtas.
- Prefira uma ou duas frases; quando listar itens, liste com clareza.
- Emojis com moderação (👋 🍽️ 👍 🙏).
- NUNCA invente preços, pratos ou qualquer dado que não esteja nos dados fornecidos.
- Os dados fornecidos (cardápio, resumo do pedido, total...) devem aparecer na resposta.
- Sem markdown pesado; use *negrito* só em títulos ou valores.
- Fale em nome do restaurante, nunca como "assistente" ou "IA"."""

# Prompt label for each context field, in the order they are listed
CONTEXT_LABELS = [
    ("dish_catalog", "Cardápio de pratos:\n{}"),
    ("drink_catalog", "Cardápio de bebidas:\n{}"),
    ("added_items", "Itens que acabaram de ser adicionados: {}"),
    ("order_summary", "Resumo do pedido:\n{}"),
    ("total", "Total do pedido: R$ {:.2f}"),
    ("payment_method", "Forma de pagamento escolhida: {}"),
    ("payment_options", "Opções de pagamento: {}"),
    ("receipt", "Comanda (será enviada logo depois, não repita):\n{}"),
]


def build_context_lines(context: ResponseContext) -> List[str]:
    """Prompt lines for the context fields that are present."""
    lines = []
    for field_name, template in CONTEXT_LABELS:
        value = getattr(context, field_name)
        if value is None:
            continue
        lines.append(template.format(value))
    return lines


class ResponseComposer:
    """
    Compose outbound replies, preferring the generation collaborator.

    Usage:
        composer = ResponseComposer(llm)
        text = composer.compose(reply_spec, utterance="quero ver o cardápio")
    """

    def __init__(self, llm: Optional[GenerationClient] = None, restaurant_name: str = None):
        self.llm = llm
        self.system_prompt = PERSONA_PROMPT.format(
            restaurant_name=restaurant_name or config.RESTAURANT_NAME,
        )

    def build_prompt(self, reply: ReplySpec, utterance: str = "") -> str:
        parts = [f"Etapa atual do atendimento: {reply.step}."]
        if reply.instruction:
            parts.append(f"Contexto: {reply.instruction}")
        parts.append(f'Mensagem do cliente: "{utterance}"')

        context_lines = build_context_lines(reply.context)
        if context_lines:
            parts.append("\nDados que você DEVE usar na resposta:")
            parts.extend(context_lines)

        parts.append(
            "\nEscreva APENAS a mensagem que o atendente vai enviar ao cliente, "
            "em uma única resposta natural."
        )
        return "\n".join(parts)

    def compose(self, reply: ReplySpec, utterance: str = "") -> str:
        """Return the text to send for ``reply``; never empty, never raises on generator failure."""
        if reply.literal or self.llm is None:
            return reply.fallback

        try:
            text = self.llm.complete(self.build_prompt(reply, utterance), system=self.system_prompt)
        except Exception as e:
            # Replies go out after the turn committed; nothing may stop them now
            logger.warning("Generation failed for step %s: %s", reply.step, e)
            return reply.fallback
        if not text:
            logger.debug("Using fallback text for step %s", reply.step)
            return reply.fallback
        return text
