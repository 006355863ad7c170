"""
Database models for the Truck POS backend tables.

The schema itself is owned by the backend (row-level security, triggers and
stored procedures live there). These declarations mirror the columns this
application reads and writes so that queries can be expressed with the ORM.
Weighted average cost and stock totals on inventory items are maintained by
backend triggers; nothing in this package recomputes them.
"""

import uuid

from sqlalchemy import (
    Column,
    String,
    Float,
    Boolean,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Text,
    Index,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


# --- Inventory ---

class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, unique=True, nullable=False)
    category = Column(String, nullable=False, index=True)  # 'proteins', 'sauces', 'packaging', ...
    unit_of_measurement = Column(String, nullable=False)    # 'kg', 'g', 'L', 'ml', 'pc', ...
    total_quantity = Column(Float, nullable=False, default=0.0)
    total_value = Column(Float, nullable=False, default=0.0)
    weighted_avg_cost = Column(Float, nullable=False, default=0.0)
    reorder_threshold = Column(Float, nullable=True)
    is_expirable = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    purchases = relationship("StockPurchase", back_populates="inventory_item", cascade="all, delete-orphan")


class StockPurchase(Base):
    """One received lot of stock. FIFO deduction drains quantity_remaining oldest first."""
    __tablename__ = "stock_purchases"

    id = Column(String(36), primary_key=True, default=_uuid)
    inventory_item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False, index=True)
    quantity_purchased = Column(Float, nullable=False)
    quantity_remaining = Column(Float, nullable=False)
    cost_per_unit = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)
    supplier = Column(String, nullable=True)
    purchase_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    inventory_item = relationship("InventoryItem", back_populates="purchases")


# --- Menu ---

class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    recipe_type = Column(String, nullable=False, default="fixed_recipe")  # 'fixed_recipe' | 'variable_recipe'
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    category = Column(String, nullable=True, index=True)
    display_order = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    ingredients = relationship("MenuIngredient", back_populates="menu_item", cascade="all, delete-orphan")
    option_groups = relationship("MenuOptionGroup", back_populates="menu_item", cascade="all, delete-orphan")
    packaging = relationship("MenuPackaging", back_populates="menu_item", cascade="all, delete-orphan")


class MenuIngredient(Base):
    """Fixed ingredient consumed by every unit sold."""
    __tablename__ = "menu_ingredients"

    id = Column(String(36), primary_key=True, default=_uuid)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id"), nullable=False, index=True)
    inventory_item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    menu_item = relationship("MenuItem", back_populates="ingredients")
    inventory_item = relationship("InventoryItem")


class MenuOptionGroup(Base):
    __tablename__ = "menu_option_groups"

    id = Column(String(36), primary_key=True, default=_uuid)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_required = Column(Boolean, nullable=False, default=False)
    multiple_selection = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    menu_item = relationship("MenuItem", back_populates="option_groups")
    options = relationship("MenuOption", back_populates="option_group", cascade="all, delete-orphan")


class MenuOption(Base):
    __tablename__ = "menu_options"

    id = Column(String(36), primary_key=True, default=_uuid)
    option_group_id = Column(String(36), ForeignKey("menu_option_groups.id"), nullable=False, index=True)
    inventory_item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)
    additional_price = Column(Float, nullable=False, default=0.0)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    option_group = relationship("MenuOptionGroup", back_populates="options")
    inventory_item = relationship("InventoryItem")


class MenuPackaging(Base):
    __tablename__ = "menu_packaging"

    id = Column(String(36), primary_key=True, default=_uuid)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id"), nullable=False, index=True)
    inventory_item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    menu_item = relationship("MenuItem", back_populates="packaging")
    inventory_item = relationship("InventoryItem")


# --- Sales (written by the sale-completion procedure, read here) ---

class Sale(Base):
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=_uuid)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    revenue = Column(Float, nullable=False)
    cogs = Column(Float, nullable=False)
    profit = Column(Float, nullable=False)
    channel = Column(String, nullable=False, default="pos")
    payment_method = Column(String, nullable=False, index=True)
    discount_percent = Column(Float, nullable=True)
    discount_amount = Column(Float, nullable=True)
    original_revenue = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    menu_item = relationship("MenuItem")
    ingredients = relationship("SaleIngredient", back_populates="sale", cascade="all, delete-orphan")
    selections = relationship("SaleSelection", back_populates="sale", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_sales_payment_method_created_at", "payment_method", "created_at"),
    )


class SaleIngredient(Base):
    __tablename__ = "sale_ingredients"

    id = Column(String(36), primary_key=True, default=_uuid)
    sale_id = Column(String(36), ForeignKey("sales.id"), nullable=False, index=True)
    inventory_item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    sale = relationship("Sale", back_populates="ingredients")


class SaleSelection(Base):
    __tablename__ = "sale_selections"

    id = Column(String(36), primary_key=True, default=_uuid)
    sale_id = Column(String(36), ForeignKey("sales.id"), nullable=False, index=True)
    option_group_id = Column(String(36), nullable=True)
    option_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    sale = relationship("Sale", back_populates="selections")


# --- Owner balance ---

class OwnerInitialBalance(Base):
    __tablename__ = "owner_initial_balance"

    id = Column(String(36), primary_key=True, default=_uuid)
    amount = Column(Float, nullable=False)
    set_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class OwnerBalanceAdjustment(Base):
    __tablename__ = "owner_balance_adjustments"

    id = Column(String(36), primary_key=True, default=_uuid)
    amount = Column(Float, nullable=False)          # always stored as a positive amount
    reason = Column(String, nullable=False)
    adjustment_type = Column(String, nullable=False)  # 'add' | 'subtract'
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
