"""
Routes Package for the Restaurant Bot
=====================================

API route definitions. Each module defines a FastAPI APIRouter.

- messages.py: Inbound customer messages

Routers are registered by ``restaurant_bot.main.create_app``.
"""

from .messages import messages_router

__all__ = ["messages_router"]
