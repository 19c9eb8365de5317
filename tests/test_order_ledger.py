"""
Tests for the order ledger and the menu catalog reads.
"""
import pytest

from restaurant_bot.models import MenuItem, Order, OrderItem
from restaurant_bot.services.conversation import get_or_create_conversation, set_conversation_state
from restaurant_bot.services.menu import DISH, DRINK, MenuCatalog, format_catalog, format_price
from restaurant_bot.services.order import OrderLedger, OrderNotFound
from restaurant_bot.tasks.schemas import ConversationState, OrderStatus, PaymentMethod


class TestMenuCatalog:

    def test_active_dishes_include_uncategorized(self, db):
        names = [item.name for item in MenuCatalog(db).active_items(DISH)]
        assert names == ["Feijoada", "Lasanha", "Parmegiana"]

    def test_active_drinks(self, db):
        names = [item.name for item in MenuCatalog(db).active_items(DRINK)]
        assert names == ["Refrigerante", "Suco"]

    def test_by_ids_keeps_request_order(self, db):
        items = MenuCatalog(db).active_items_by_ids([2, 1], DISH)
        assert [item.id for item in items] == [2, 1]

    def test_by_ids_drops_unknown_inactive_and_other_category(self, db):
        items = MenuCatalog(db).active_items_by_ids([1, 4, 6, 99], DISH)
        assert [item.id for item in items] == [1]

    def test_by_ids_ignores_out_of_range_ids(self, db):
        items = MenuCatalog(db).active_items_by_ids([10**20, 0, 2], DISH)
        assert [item.id for item in items] == [2]

    def test_format_catalog(self, db):
        text = format_catalog(MenuCatalog(db).active_items(DRINK))
        assert text == "4 - Refrigerante - R$ 5.00\n5 - Suco - R$ 7.50"

    def test_format_price(self):
        assert format_price(10) == "R$ 10.00"
        assert format_price(7.5) == "R$ 7.50"


class TestConversation:

    def test_get_or_create_is_idempotent(self, db):
        first = get_or_create_conversation(db, "+5511911112222")
        db.commit()
        second = get_or_create_conversation(db, "+5511911112222")
        assert first.id == second.id
        assert second.state == ConversationState.INITIAL.value

    def test_set_state(self, db, conversation):
        set_conversation_state(db, conversation, ConversationState.SELECTING_DISHES)
        db.commit()
        db.refresh(conversation)
        assert conversation.state == "selecting_dishes"


class TestOrderLedger:

    def test_ensure_open_order_is_idempotent(self, db, conversation):
        ledger = OrderLedger(db)
        first = ledger.ensure_open_order(conversation)
        second = ledger.ensure_open_order(conversation)
        assert first == second
        assert db.query(Order).count() == 1

    def test_new_order_is_building(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        order = db.get(Order, order_id)
        assert order.status == OrderStatus.BUILDING.value
        assert order.total == 0.0

    def test_add_items_updates_total(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)

        ledger.add_items(order_id, [("Feijoada", 10.0), ("Lasanha", 15.0)])
        ledger.add_items(order_id, [("Suco", 7.5)])

        order = db.get(Order, order_id)
        assert order.total == 32.5
        assert [item.item_name for item in order.items] == ["Feijoada", "Lasanha", "Suco"]
        assert all(item.quantity == 1 for item in order.items)

    def test_add_items_unknown_order(self, db):
        with pytest.raises(OrderNotFound):
            OrderLedger(db).add_items(12345, [("Feijoada", 10.0)])

    def test_summarize(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        ledger.add_items(order_id, [("Feijoada", 10.0), ("Refrigerante", 5.0)])

        summary = ledger.summarize(order_id)

        assert summary.total == 15.0
        assert summary.render_lines() == (
            "  • Feijoada x1 - R$ 10.00\n"
            "  • Refrigerante x1 - R$ 5.00"
        )

    def test_summarize_empty_order(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        summary = ledger.summarize(order_id)
        assert summary.lines == []
        assert summary.total == 0.0

    def test_mark_confirming_keeps_order_current(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        ledger.mark_confirming(order_id)

        order = ledger.current_order(conversation)
        assert order.id == order_id
        assert order.status == OrderStatus.AWAITING_CONFIRMATION.value
        assert ledger.current_order(conversation, statuses=(OrderStatus.BUILDING,)) is None

    def test_set_payment_and_close(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        ledger.add_items(order_id, [("Feijoada", 10.0), ("Lasanha", 15.0)])
        ledger.mark_confirming(order_id)

        receipt = ledger.set_payment_and_close(conversation, PaymentMethod.CASH)

        order = db.get(Order, order_id)
        assert order.status == OrderStatus.PLACED.value
        assert order.payment_method == "Cash"
        assert receipt.order_id == order_id
        assert receipt.total == 25.0
        assert receipt.render() == (
            f"📄 *COMANDA #{order_id}*\n"
            "  • Feijoada x1 - R$ 10.00\n"
            "  • Lasanha x1 - R$ 15.00\n"
            "*Total: R$ 25.00*\n"
            "Pagamento: Dinheiro\n"
            "Cliente: +5511999990000"
        )
        assert ledger.current_order(conversation) is None

    def test_set_payment_requires_confirming_order(self, db, conversation):
        ledger = OrderLedger(db)
        ledger.ensure_open_order(conversation)  # still building

        with pytest.raises(OrderNotFound):
            ledger.set_payment_and_close(conversation, PaymentMethod.PIX)

    def test_reset_cancels_open_orders_only(self, db, conversation):
        ledger = OrderLedger(db)
        placed_id = ledger.ensure_open_order(conversation)
        ledger.mark_confirming(placed_id)
        ledger.set_payment_and_close(conversation, PaymentMethod.PIX)
        open_id = ledger.ensure_open_order(conversation)

        assert ledger.reset(conversation) == 1

        assert db.get(Order, placed_id).status == OrderStatus.PLACED.value
        assert db.get(Order, open_id).status == OrderStatus.CANCELLED.value
        assert ledger.current_order(conversation) is None

    def test_reset_without_orders(self, db, conversation):
        assert OrderLedger(db).reset(conversation) == 0

    def test_require_order(self, db, conversation):
        ledger = OrderLedger(db)
        with pytest.raises(OrderNotFound):
            ledger.require_order(conversation)
        order_id = ledger.ensure_open_order(conversation)
        assert ledger.require_order(conversation).id == order_id

    def test_items_are_snapshots(self, db, conversation):
        """Line items keep the name and price they were added with."""
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        ledger.add_items(order_id, [("Feijoada", 10.0)])
        db.get(MenuItem, 1).price = 12.0
        db.commit()

        item = db.query(OrderItem).filter(OrderItem.order_id == order_id).one()
        assert (item.item_name, item.unit_price) == ("Feijoada", 10.0)

    def test_summary_total_matches_stored_total(self, db, conversation):
        ledger = OrderLedger(db)
        order_id = ledger.ensure_open_order(conversation)
        for batch in ([("Feijoada", 10.0)], [("Suco", 7.5), ("Suco", 7.5)], [("Parmegiana", 20.0)]):
            ledger.add_items(order_id, batch)
            summary = ledger.summarize(order_id)
            assert summary.total == db.get(Order, order_id).total
            assert summary.total == round(sum(line.subtotal for line in summary.lines), 2)
        assert summary.total == 45.0
