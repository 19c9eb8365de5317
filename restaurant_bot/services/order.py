"""
Order Ledger for the Restaurant Bot
===================================

This module owns the in-progress order aggregate of a conversation: its line
items, its running total and its lifecycle status.

Order Lifecycle:
----------------
1. First item selection -> ensure_open_order creates the order (building)
2. Customer finishes selecting -> mark_confirming (awaiting_confirmation)
3. Customer picks a payment method -> set_payment_and_close (placed)
4. Customer declines or cancels -> reset (cancelled)

At most one order per conversation is open (building or awaiting
confirmation) at any time. The "current order" is the most recently created
open order.

Totals:
-------
``total`` is always the sum of ``unit_price * quantity`` over the order's line
items. It is recomputed in the same transaction that inserts the items, so no
reader sees a stale total once the turn commits.

Transactions:
-------------
The ledger only flushes. The caller owns the session and commits once per
turn, or rolls back if anything in the turn fails.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Conversation, Order, OrderItem
from ..tasks.schemas import OrderStatus, OPEN_ORDER_STATUSES, PaymentMethod
from .menu import format_price

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base class for order ledger errors."""


class OrderNotFound(LedgerError):
    """No order in the expected status exists for the conversation."""


@dataclass
class SummaryLine:
    name: str
    price: float
    quantity: int
    subtotal: float

    def render(self) -> str:
        return f"  • {self.name} x{self.quantity} - {format_price(self.subtotal)}"


@dataclass
class OrderSummary:
    """Read-only projection of an order used for confirmation and receipts."""
    lines: List[SummaryLine]
    total: float

    def render_lines(self) -> str:
        return "\n".join(line.render() for line in self.lines)


@dataclass
class Receipt:
    """What the kitchen and the customer get once an order is placed."""
    order_id: int
    lines: List[SummaryLine]
    total: float
    payment_method: PaymentMethod
    channel_address: str

    def render(self) -> str:
        body = "\n".join(line.render() for line in self.lines)
        return (
            f"📄 *COMANDA #{self.order_id}*\n"
            f"{body}\n"
            f"*Total: {format_price(self.total)}*\n"
            f"Pagamento: {self.payment_method.label}\n"
            f"Cliente: {self.channel_address}"
        )


class OrderLedger:
    """
    Order operations for one turn, bound to the turn's database session.

    Usage:
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        ledger.add_items(order_id, [("Feijoada", 32.0)])
        summary = ledger.summarize(order_id)
    """

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def current_order(
        self,
        conversation: Conversation,
        statuses: Sequence[OrderStatus] = OPEN_ORDER_STATUSES,
        lock: bool = False,
    ) -> Optional[Order]:
        """Most recent order of the conversation in one of ``statuses``."""
        query = (
            self.db.query(Order)
            .filter(
                Order.conversation_id == conversation.id,
                Order.status.in_([s.value for s in statuses]),
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    def require_order(
        self,
        conversation: Conversation,
        statuses: Sequence[OrderStatus] = OPEN_ORDER_STATUSES,
    ) -> Order:
        """
        Like ``current_order`` but for steps that cannot proceed without one.

        Raises:
            OrderNotFound: if the conversation has no order in ``statuses``.
        """
        order = self.current_order(conversation, statuses=statuses)
        if order is None:
            raise OrderNotFound(
                f"No order in {[s.value for s in statuses]} for conversation #{conversation.id}"
            )
        return order

    def _get_order(self, order_id: int, lock: bool = False) -> Order:
        query = self.db.query(Order).filter(Order.id == order_id)
        if lock:
            query = query.with_for_update()
        order = query.first()
        if order is None:
            raise OrderNotFound(f"Order #{order_id} does not exist")
        return order

    def summarize(self, order_id: int) -> OrderSummary:
        """Line-by-line projection of an order with its total."""
        rows = (
            self.db.query(OrderItem)
            .filter(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
            .all()
        )
        lines = [
            SummaryLine(
                name=row.item_name,
                price=row.unit_price,
                quantity=row.quantity,
                subtotal=round(row.unit_price * row.quantity, 2),
            )
            for row in rows
        ]
        total = round(sum(line.subtotal for line in lines), 2)
        return OrderSummary(lines=lines, total=total)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def ensure_open_order(self, conversation: Conversation) -> int:
        """
        Return the id of the conversation's open order, creating one in
        ``building`` status if there is none.

        Calling it again in the same turn returns the same id.
        """
        # Serialize order creation per conversation
        self.db.query(Conversation).filter(Conversation.id == conversation.id).with_for_update().one()

        order = self.current_order(conversation, lock=True)
        if order is not None:
            return order.id

        order = Order(
            conversation_id=conversation.id,
            status=OrderStatus.BUILDING.value,
            total=0.0,
        )
        self.db.add(order)
        self.db.flush()
        logger.info("Order #%d opened for conversation #%d", order.id, conversation.id)
        return order.id

    def add_items(self, order_id: int, items: Iterable[Tuple[str, float]]) -> None:
        """
        Append one line item (quantity 1) per ``(name, price)`` entry and
        recompute the stored total.
        """
        order = self._get_order(order_id, lock=True)

        added = 0
        for name, price in items:
            self.db.add(OrderItem(
                order_id=order.id,
                item_name=name,
                unit_price=float(price),
                quantity=1,
            ))
            added += 1
        self.db.flush()

        total = (
            self.db.query(func.coalesce(func.sum(OrderItem.unit_price * OrderItem.quantity), 0.0))
            .filter(OrderItem.order_id == order.id)
            .scalar()
        )
        order.total = round(float(total), 2)
        self.db.flush()
        logger.info("Order #%d: %d item(s) added, total now %.2f", order.id, added, order.total)

    def mark_confirming(self, order_id: int) -> None:
        """Move a building order to awaiting confirmation."""
        order = self._get_order(order_id, lock=True)
        order.status = OrderStatus.AWAITING_CONFIRMATION.value
        self.db.flush()

    def set_payment_and_close(self, conversation: Conversation, method: PaymentMethod) -> Receipt:
        """
        Record the payment method on the order awaiting confirmation and
        place it.

        Raises:
            OrderNotFound: if no order of the conversation awaits confirmation.
        """
        order = self.current_order(
            conversation,
            statuses=(OrderStatus.AWAITING_CONFIRMATION,),
            lock=True,
        )
        if order is None:
            raise OrderNotFound(
                f"No order awaiting confirmation for conversation #{conversation.id}"
            )

        order.payment_method = method.value
        order.status = OrderStatus.PLACED.value
        self.db.flush()

        summary = self.summarize(order.id)
        logger.info("Order #%d placed (%s, total %.2f)", order.id, method.value, summary.total)
        return Receipt(
            order_id=order.id,
            lines=summary.lines,
            total=summary.total,
            payment_method=method,
            channel_address=conversation.channel_address,
        )

    def reset(self, conversation: Conversation) -> int:
        """
        Cancel every open order of the conversation.

        Returns the number of orders cancelled.
        """
        orders = (
            self.db.query(Order)
            .filter(
                Order.conversation_id == conversation.id,
                Order.status.in_([s.value for s in OPEN_ORDER_STATUSES]),
            )
            .with_for_update()
            .all()
        )
        for order in orders:
            order.status = OrderStatus.CANCELLED.value
        if orders:
            self.db.flush()
            logger.info(
                "Cancelled %d open order(s) for conversation #%d",
                len(orders), conversation.id,
            )
        return len(orders)
