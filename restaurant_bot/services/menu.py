"""
Menu Catalog Reads
==================

Read-only queries over the menu catalog. The engine never writes the catalog;
menu maintenance happens elsewhere.

Entries without a category are listed as dishes, matching how the catalog has
always been maintained.
"""

import logging
from typing import Iterable, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models import MenuItem

logger = logging.getLogger(__name__)

DISH = "dish"
DRINK = "drink"

# Largest id an Integer primary key holds on every supported database
MAX_MENU_ID = 2**31 - 1


def format_price(value: float) -> str:
    """Format an amount in reais, e.g. 10 -> 'R$ 10.00'."""
    return f"R$ {float(value):.2f}"


def format_catalog(items: Iterable[MenuItem]) -> str:
    """Render catalog entries as '<id> - <name> - R$ <price>' lines."""
    return "\n".join(f"{item.id} - {item.name} - {format_price(item.price)}" for item in items)


class MenuCatalog:
    """Queries active menu entries by category and by identifier set."""

    def __init__(self, db: Session):
        self.db = db

    def _category_filter(self, category: str):
        if category == DISH:
            return or_(MenuItem.category == DISH, MenuItem.category.is_(None))
        return MenuItem.category == category

    def active_items(self, category: str) -> List[MenuItem]:
        """All active entries of ``category``, ordered by id."""
        return (
            self.db.query(MenuItem)
            .filter(MenuItem.active.is_(True), self._category_filter(category))
            .order_by(MenuItem.id)
            .all()
        )

    def active_items_by_ids(self, ids: List[int], category: str) -> List[MenuItem]:
        """
        Active entries of ``category`` whose id is in ``ids``.

        Results follow the order of ``ids``; ids that are unknown, inactive, out of
        range or of another category are dropped.
        """
        ids = [i for i in ids if 0 < i <= MAX_MENU_ID]
        if not ids:
            return []
        rows = (
            self.db.query(MenuItem)
            .filter(
                MenuItem.active.is_(True),
                MenuItem.id.in_(ids),
                self._category_filter(category),
            )
            .all()
        )
        by_id = {row.id: row for row in rows}
        matched = [by_id[i] for i in ids if i in by_id]
        if len(matched) < len(ids):
            logger.debug("Ignored unmatched %s ids: %s", category, [i for i in ids if i not in by_id])
        return matched
