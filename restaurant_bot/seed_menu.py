"""
Seed a sample menu into an empty catalog.

Usage:
    python -m restaurant_bot.seed_menu
"""

import logging

from sqlalchemy.orm import Session

from . import config
from .db import create_session_factory
from .models import MenuItem
from .services.menu import DISH, DRINK

logger = logging.getLogger(__name__)


SAMPLE_MENU = [
    # Pratos
    ("Feijoada completa", 42.90, DISH),
    ("Picanha na chapa", 58.00, DISH),
    ("Frango grelhado com legumes", 34.50, DISH),
    ("Moqueca de peixe", 49.90, DISH),
    ("Risoto de cogumelos", 39.00, DISH),
    # Bebidas
    ("Refrigerante lata", 6.00, DRINK),
    ("Suco natural de laranja", 9.50, DRINK),
    ("Água mineral", 4.00, DRINK),
    ("Cerveja long neck", 11.00, DRINK),
]


def seed_menu(db: Session) -> int:
    """
    Insert the sample menu if the catalog is empty.

    Returns the number of items inserted (0 when the catalog already has items).
    """
    existing = db.query(MenuItem).count()
    if existing > 0:
        logger.info("Menu already has %d items. Not seeding again.", existing)
        return 0

    for name, price, category in SAMPLE_MENU:
        db.add(MenuItem(name=name, price=price, category=category, active=True))
    db.commit()
    logger.info("Seeded %d menu items", len(SAMPLE_MENU))
    return len(SAMPLE_MENU)


def main():
    from .logging_config import setup_logging

    setup_logging()
    session_factory = create_session_factory(config.DATABASE_URL)
    db = session_factory()
    try:
        seed_menu(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
