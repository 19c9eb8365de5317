from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Conversation(Base):
    """One per remote party, keyed by the channel address (phone number)."""
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True)
    channel_address = Column(String, unique=True, nullable=False, index=True)
    state = Column(String, nullable=False, default="initial")  # see ConversationState
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    orders = relationship("Order", back_populates="conversation", cascade="all, delete-orphan")


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="building", index=True)  # building/awaiting_confirmation/placed/cancelled
    payment_method = Column(String, nullable=True)
    total = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    conversation = relationship("Conversation", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    # "Current order" lookups filter by conversation and status, newest first
    __table_args__ = (
        Index("ix_orders_conversation_status", "conversation_id", "status"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    # Copied from the menu when added; later menu edits never touch these
    item_name = Column(String, nullable=False)
    unit_price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    order = relationship("Order", back_populates="items")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    category = Column(String, nullable=True, index=True)  # 'dish' or 'drink'; NULL is listed as a dish
    active = Column(Boolean, nullable=False, default=True)
