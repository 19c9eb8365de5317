"""
Services Package for the Restaurant Bot
=======================================

This package contains the persistence-facing services the dialogue engine
depends on. Every service receives the turn's SQLAlchemy session instead of
creating one, so the caller decides when a turn commits or rolls back.

Available Services:
-------------------
- **conversation**: Conversation lookup-or-create and state updates
- **menu**: Read-only catalog queries and catalog formatting
- **order**: The order ledger (line items, totals, lifecycle)

Usage:
------
    from restaurant_bot.services.conversation import get_or_create_conversation
    from restaurant_bot.services.menu import MenuCatalog
    from restaurant_bot.services.order import OrderLedger, OrderNotFound
"""
