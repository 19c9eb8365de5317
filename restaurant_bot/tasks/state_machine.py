"""
State Machine for the Ordering Dialogue.

Each conversation state has one handler that decides, from the interpreted
utterance, which ledger operations run, which replies are sent and which
state comes next. Handlers only consume intents that are valid for their
state; anything else falls into the state's re-prompt.

Flow:
    initial -> awaiting_menu_consent -> selecting_dishes -> selecting_drinks
            -> confirming_order -> awaiting_payment -> initial

The machine does not persist the next state itself. It returns a TurnResult
and the message processor stores ``next_state`` in the same transaction as
the ledger changes.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..models import Conversation, MenuItem
from ..services.menu import DISH, DRINK, MenuCatalog, format_catalog, format_price
from ..services.order import OrderLedger, OrderNotFound
from .conversation_messages import ConversationMessages
from .interpreter import UtteranceInterpreter
from .schemas import (
    ConversationState,
    Intent,
    Interpretation,
    OrderStatus,
    ReplySpec,
    ResponseContext,
    TurnResult,
)

logger = logging.getLogger(__name__)


class DialogueStateMachine:
    """
    Drives one conversation turn.

    Usage:
        machine = DialogueStateMachine(UtteranceInterpreter(llm))
        result = machine.process(conversation, "1 e 2", OrderLedger(db), MenuCatalog(db))
    """

    def __init__(self, interpreter: Optional[UtteranceInterpreter] = None):
        self.interpreter = interpreter or UtteranceInterpreter()
        self._handlers: Dict[ConversationState, Callable[..., TurnResult]] = {
            ConversationState.INITIAL: self._handle_initial,
            ConversationState.AWAITING_MENU_CONSENT: self._handle_awaiting_menu_consent,
            ConversationState.SELECTING_DISHES: self._handle_selecting_dishes,
            ConversationState.SELECTING_DRINKS: self._handle_selecting_drinks,
            ConversationState.CONFIRMING_ORDER: self._handle_confirming_order,
            ConversationState.AWAITING_PAYMENT: self._handle_awaiting_payment,
        }

    def process(
        self,
        conversation: Conversation,
        utterance: str,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        """
        Run one turn for ``conversation``.

        An unrecognized stored state sends the conversation back to the start.
        A missing order where one is required cancels what is left and starts
        over.
        """
        try:
            state = ConversationState(conversation.state)
        except ValueError:
            logger.warning(
                "Conversation #%d has unknown state %r; restarting",
                conversation.id, conversation.state,
            )
            return TurnResult(
                next_state=ConversationState.INITIAL,
                replies=[ReplySpec(
                    step="out_of_flow",
                    fallback=ConversationMessages.OUT_OF_FLOW,
                    instruction="Convide o cliente a mandar 'oi' para começar um pedido.",
                )],
            )

        interpretation = self.interpreter.interpret(state, utterance)
        logger.debug(
            "Conversation #%d in %s: %s %s",
            conversation.id, state.value, interpretation.intent.value, interpretation.selections,
        )

        try:
            return self._handlers[state](conversation, interpretation, ledger, catalog)
        except OrderNotFound as e:
            logger.warning("Conversation #%d: %s; restarting", conversation.id, e)
            ledger.reset(conversation)
            return TurnResult(
                next_state=ConversationState.INITIAL,
                replies=[ReplySpec(
                    step="order_not_found",
                    fallback=ConversationMessages.ORDER_NOT_FOUND,
                    instruction="O pedido não foi encontrado. Peça para o cliente recomeçar dizendo 'oi'.",
                )],
            )

    # -------------------------------------------------------------------------
    # Reply builders
    # -------------------------------------------------------------------------

    def _dish_menu_reply(self, catalog: MenuCatalog) -> ReplySpec:
        listing = format_catalog(catalog.active_items(DISH)) or ConversationMessages.NO_DISHES_AVAILABLE
        return ReplySpec(
            step="dish_menu",
            fallback=ConversationMessages.DISH_MENU.format(catalog=listing),
            instruction=(
                "O cliente quer ver o cardápio. Mostre os pratos e explique que ele deve "
                "digitar os números dos pratos e 'pronto' quando terminar."
            ),
            context=ResponseContext(dish_catalog=listing),
        )

    def _drink_menu_reply(self, catalog: MenuCatalog) -> ReplySpec:
        listing = format_catalog(catalog.active_items(DRINK)) or ConversationMessages.NO_DRINKS_AVAILABLE
        return ReplySpec(
            step="drink_menu",
            fallback=ConversationMessages.DRINK_MENU.format(catalog=listing),
            instruction=(
                "O cliente terminou os pratos. Ofereça as bebidas e explique que ele pode "
                "digitar os números ou 'não' se não quiser bebida."
            ),
            context=ResponseContext(drink_catalog=listing),
        )

    def _cancelled(self, conversation: Conversation, ledger: OrderLedger) -> TurnResult:
        ledger.reset(conversation)
        return TurnResult(
            next_state=ConversationState.INITIAL,
            replies=[ReplySpec(
                step="order_cancelled",
                fallback=ConversationMessages.ORDER_CANCELLED,
                instruction="O cliente desistiu do pedido. Despeça-se e diga que é só mandar 'oi' para recomeçar.",
            )],
        )

    def _add_selection(
        self,
        conversation: Conversation,
        items: List[MenuItem],
        ledger: OrderLedger,
    ) -> int:
        order_id = ledger.ensure_open_order(conversation)
        ledger.add_items(order_id, [(item.name, item.price) for item in items])
        return order_id

    # -------------------------------------------------------------------------
    # State handlers
    # -------------------------------------------------------------------------

    def _handle_initial(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        # Leftovers from an abandoned dialogue must not leak into the new one
        ledger.reset(conversation)
        return TurnResult(
            next_state=ConversationState.AWAITING_MENU_CONSENT,
            replies=[ReplySpec(
                step="greeting",
                fallback=ConversationMessages.GREETING,
                instruction=(
                    "Primeira mensagem do cliente. Cumprimente com 'Boa noite' e pergunte "
                    "se ele quer ver o cardápio, pedindo para responder 'sim' ou 'claro'."
                ),
            )],
        )

    def _handle_awaiting_menu_consent(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        if interpretation.intent in (Intent.WANTS_MENU, Intent.VIEW_MENU_AGAIN):
            return TurnResult(
                next_state=ConversationState.SELECTING_DISHES,
                replies=[self._dish_menu_reply(catalog)],
            )

        return TurnResult(
            next_state=ConversationState.AWAITING_MENU_CONSENT,
            replies=[ReplySpec(
                step="menu_invitation",
                fallback=ConversationMessages.MENU_INVITATION,
                instruction="O cliente ainda não pediu o cardápio. Convide com gentileza a dizer 'sim' ou 'claro'.",
            )],
        )

    def _handle_selecting_dishes(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        intent = interpretation.intent
        state = ConversationState.SELECTING_DISHES

        if intent == Intent.CANCEL:
            return self._cancelled(conversation, ledger)

        if intent == Intent.VIEW_MENU_AGAIN:
            return TurnResult(next_state=state, replies=[self._dish_menu_reply(catalog)])

        if intent == Intent.DONE_SELECTING:
            order = ledger.current_order(conversation, statuses=(OrderStatus.BUILDING,))
            if order is None:
                return TurnResult(next_state=state, replies=[ReplySpec(
                    step="no_dish_chosen",
                    fallback=ConversationMessages.NO_DISH_CHOSEN,
                    instruction="O cliente disse 'pronto' sem escolher nenhum prato. Peça pelo menos um número.",
                )])
            return TurnResult(
                next_state=ConversationState.SELECTING_DRINKS,
                replies=[self._drink_menu_reply(catalog)],
                order_id=order.id,
            )

        if intent == Intent.ITEM_SELECTION and interpretation.selections:
            dishes = catalog.active_items_by_ids(interpretation.selections, DISH)
            if not dishes:
                return TurnResult(next_state=state, replies=[ReplySpec(
                    step="dishes_not_found",
                    fallback=ConversationMessages.DISHES_NOT_FOUND,
                    instruction="Nenhum dos números digitados é um prato do cardápio. Peça números válidos.",
                )])
            order_id = self._add_selection(conversation, dishes, ledger)
            names = ", ".join(dish.name for dish in dishes)
            return TurnResult(
                next_state=state,
                replies=[ReplySpec(
                    step="dishes_added",
                    fallback=ConversationMessages.DISHES_ADDED.format(names=names),
                    instruction=(
                        "Pratos adicionados ao pedido. Confirme quais foram e pergunte se quer mais "
                        "algum ou se pode digitar 'pronto' para ir às bebidas."
                    ),
                    context=ResponseContext(added_items=names),
                )],
                order_id=order_id,
            )

        return TurnResult(next_state=state, replies=[ReplySpec(
            step="dish_numbers_prompt",
            fallback=ConversationMessages.DISH_NUMBERS_PROMPT,
            instruction="Lembre o cliente de digitar os números dos pratos ou 'pronto' quando terminar.",
        )])

    def _handle_selecting_drinks(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        intent = interpretation.intent
        state = ConversationState.SELECTING_DRINKS

        if intent == Intent.CANCEL:
            return self._cancelled(conversation, ledger)

        if intent == Intent.VIEW_MENU_AGAIN:
            return TurnResult(next_state=state, replies=[self._drink_menu_reply(catalog)])

        if intent in (Intent.DECLINE_DRINK, Intent.DONE_SELECTING):
            order = ledger.require_order(conversation, statuses=(OrderStatus.BUILDING,))
            summary = ledger.summarize(order.id)
            ledger.mark_confirming(order.id)
            lines = summary.render_lines()
            return TurnResult(
                next_state=ConversationState.CONFIRMING_ORDER,
                replies=[ReplySpec(
                    step="order_summary",
                    fallback=ConversationMessages.ORDER_SUMMARY.format(
                        lines=lines,
                        total=format_price(summary.total),
                    ),
                    instruction=(
                        "Mostre o resumo do pedido com o total e pergunte se está certo (sim/não)."
                    ),
                    context=ResponseContext(order_summary=lines, total=summary.total),
                )],
                order_id=order.id,
            )

        if intent == Intent.ITEM_SELECTION and interpretation.selections:
            ledger.require_order(conversation, statuses=(OrderStatus.BUILDING,))
            drinks = catalog.active_items_by_ids(interpretation.selections, DRINK)
            if not drinks:
                return TurnResult(next_state=state, replies=[ReplySpec(
                    step="drinks_not_found",
                    fallback=ConversationMessages.DRINKS_NOT_FOUND,
                    instruction="Nenhum dos números digitados é uma bebida do cardápio. Peça números válidos ou 'não'.",
                )])
            order_id = self._add_selection(conversation, drinks, ledger)
            names = ", ".join(drink.name for drink in drinks)
            return TurnResult(
                next_state=state,
                replies=[ReplySpec(
                    step="drinks_added",
                    fallback=ConversationMessages.DRINKS_ADDED.format(names=names),
                    instruction=(
                        "Bebidas adicionadas ao pedido. Confirme quais foram e pergunte se quer mais "
                        "alguma ou 'não' para confirmar o pedido."
                    ),
                    context=ResponseContext(added_items=names),
                )],
                order_id=order_id,
            )

        return TurnResult(next_state=state, replies=[ReplySpec(
            step="drink_numbers_prompt",
            fallback=ConversationMessages.DRINK_NUMBERS_PROMPT,
            instruction="Lembre o cliente de digitar os números das bebidas ou 'não' se não quiser bebida.",
        )])

    def _handle_confirming_order(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        if interpretation.intent == Intent.CONFIRM_YES:
            order = ledger.require_order(conversation, statuses=(OrderStatus.AWAITING_CONFIRMATION,))
            return TurnResult(
                next_state=ConversationState.AWAITING_PAYMENT,
                replies=[ReplySpec(
                    step="payment_options",
                    fallback=ConversationMessages.PAYMENT_OPTIONS,
                    instruction="O cliente confirmou o pedido. Pergunte a forma de pagamento com as opções numeradas.",
                    context=ResponseContext(payment_options=ConversationMessages.PAYMENT_OPTIONS_INLINE),
                )],
                order_id=order.id,
            )

        # Anything but a clear yes cancels the order
        ledger.reset(conversation)
        return TurnResult(
            next_state=ConversationState.INITIAL,
            replies=[ReplySpec(
                step="order_declined",
                fallback=ConversationMessages.ORDER_DECLINED,
                instruction="O cliente não confirmou o pedido, que foi cancelado. Diga que é só mandar 'oi' para recomeçar.",
            )],
        )

    def _handle_awaiting_payment(
        self,
        conversation: Conversation,
        interpretation: Interpretation,
        ledger: OrderLedger,
        catalog: MenuCatalog,
    ) -> TurnResult:
        if interpretation.intent == Intent.CANCEL:
            return self._cancelled(conversation, ledger)

        method = interpretation.payment_method
        if method is None:
            return TurnResult(
                next_state=ConversationState.AWAITING_PAYMENT,
                replies=[ReplySpec(
                    step="invalid_payment",
                    fallback=ConversationMessages.INVALID_PAYMENT,
                    literal=True,
                )],
            )

        receipt = ledger.set_payment_and_close(conversation, method)
        receipt_text = receipt.render()
        return TurnResult(
            next_state=ConversationState.INITIAL,
            replies=[
                ReplySpec(
                    step="thank_you",
                    fallback=ConversationMessages.THANK_YOU,
                    instruction=(
                        "Pedido fechado. Agradeça a preferência e diga que o valor será cobrado "
                        "na entrega. Não repita a comanda."
                    ),
                    context=ResponseContext(payment_method=method.label, receipt=receipt_text),
                ),
                ReplySpec(step="receipt", fallback=receipt_text, literal=True),
            ],
            order_id=receipt.order_id,
        )
