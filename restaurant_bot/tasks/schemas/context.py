"""
Response Context Schema.

The closed set of domain fields a reply may hand to the generation
collaborator. Each field has exactly one documented use; the generator is told
to include what is present and never to invent anything beyond it.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ResponseContext(BaseModel):
    """Domain data attached to one reply."""
    dish_catalog: Optional[str] = Field(
        default=None,
        description="Formatted list of active dishes, one '<id> - <name> - R$ <price>' per line",
    )
    drink_catalog: Optional[str] = Field(
        default=None,
        description="Formatted list of active drinks, same format as dish_catalog",
    )
    added_items: Optional[str] = Field(
        default=None,
        description="Comma-separated names of the items just added to the order",
    )
    order_summary: Optional[str] = Field(
        default=None,
        description="One line per order item with quantity and subtotal",
    )
    total: Optional[float] = Field(
        default=None,
        description="Order total in reais",
    )
    payment_method: Optional[str] = Field(
        default=None,
        description="Payment method the customer chose (pt-BR label)",
    )
    payment_options: Optional[str] = Field(
        default=None,
        description="Numbered payment options offered to the customer",
    )
    receipt: Optional[str] = Field(
        default=None,
        description="Receipt text that will be sent right after this reply",
    )
