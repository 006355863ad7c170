"""
POS Terminal Routes for Truck POS
=================================

Endpoints used by the order-taking screen on the truck's terminals.

Endpoints:
----------
- GET /pos/menu: Active menu with option groups
- POST /pos/menu/{id}/quote: Price and cost for a set of selected options
- GET /pos/terminals/{terminal_id}/cart: Current cart and totals
- POST /pos/terminals/{terminal_id}/cart/items: Add one unit to the cart
- DELETE /pos/terminals/{terminal_id}/cart/items/{index}: Remove a cart line
- DELETE /pos/terminals/{terminal_id}/cart: Clear the cart
- PUT /pos/terminals/{terminal_id}/cart/discount: Set the order discount
- POST /pos/terminals/{terminal_id}/checkout: Complete the sale

Cart Lifecycle:
---------------
Each terminal has one in-memory cart (see services/terminals.py). Every
"add" creates a new line priced at that moment, so two taps on the same
burger give two lines; checkout folds them back into one sale per menu
item. The cart survives a failed checkout so the cashier can retry.

Rate Limiting:
--------------
Checkout is limited per terminal (RATE_LIMIT_CHECKOUT). Overlapping
checkouts of one terminal are refused with 409 while the first holds the
terminal's checkout lock, so a double-tapped "complete" cannot record the
cart twice.

Usage:
------
    POST /pos/terminals/front/cart/items
    {"menu_item_id": "…", "selected_option_ids": ["…"]}

    POST /pos/terminals/front/checkout
    {"payment_method": "cash", "discount_percent": 10}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..backend import BackendGateway
from ..config import RATE_LIMIT_ENABLED, get_rate_limit_checkout
from ..db import get_db
from ..dependencies import get_backend_gateway
from ..schemas.menu import MenuItemWithDetails, QuoteRequest, QuoteResponse
from ..schemas.pos import (
    AddToCartRequest,
    CartOut,
    CheckoutRequest,
    CheckoutResult,
    DiscountRequest,
)
from ..services.checkout import CheckoutError, CheckoutService, EmptyCartError
from ..services.costing import calculate_dynamic_price
from ..services.menu import get_active_menu_items, get_menu_item_by_id
from ..services.options import OptionSelection, UnknownOptionError
from ..services.terminals import CartRegistry, TerminalSession, get_cart_registry


logger = logging.getLogger(__name__)

# Router definition
pos_router = APIRouter(prefix="/pos", tags=["POS"])


# =============================================================================
# Rate Limiting Setup
# =============================================================================

def get_terminal_or_ip(request: Request) -> str:
    """Rate limit key: the terminal id from the path, else the client IP."""
    terminal_id = request.path_params.get("terminal_id")
    if terminal_id:
        return f"terminal:{terminal_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=get_terminal_or_ip, enabled=RATE_LIMIT_ENABLED)


# =============================================================================
# Helper Functions
# =============================================================================

def serialize_cart(terminal_id: str, session: TerminalSession) -> CartOut:
    cart = session.cart
    return CartOut(
        terminal_id=terminal_id,
        lines=cart.current_order,
        total=cart.get_total(),
        discount_percent=session.discount_percent,
        discounted_total=cart.get_discounted_total(session.discount_percent),
    )


def _select_options(item: MenuItemWithDetails, option_ids: List[str]) -> OptionSelection:
    selection = OptionSelection(item)
    try:
        selection.select_many(option_ids)
    except UnknownOptionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return selection


# =============================================================================
# Menu Endpoints
# =============================================================================

@pos_router.get("/menu", response_model=List[MenuItemWithDetails])
def pos_menu(db: Session = Depends(get_db)) -> List[MenuItemWithDetails]:
    """Active menu items in display order, with their option groups."""
    return get_active_menu_items(db)


@pos_router.post("/menu/{item_id}/quote", response_model=QuoteResponse)
def quote_menu_item(
    item_id: str,
    payload: QuoteRequest,
    db: Session = Depends(get_db),
) -> QuoteResponse:
    """Price, cost and confirmability for one unit with the given options."""
    item = get_menu_item_by_id(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    selection = _select_options(item, payload.selected_option_ids)
    return QuoteResponse(
        menu_item_id=item.id,
        price=calculate_dynamic_price(item.price, selection.selected_options),
        actual_cogs=selection.actual_cogs,
        can_confirm=selection.can_confirm,
        selected_options_display=selection.display_text or None,
    )


# =============================================================================
# Cart Endpoints
# =============================================================================

@pos_router.get("/terminals/{terminal_id}/cart", response_model=CartOut)
def get_cart(
    terminal_id: str,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartOut:
    return serialize_cart(terminal_id, registry.get(terminal_id))


@pos_router.post("/terminals/{terminal_id}/cart/items", response_model=CartOut)
def add_cart_item(
    terminal_id: str,
    payload: AddToCartRequest,
    db: Session = Depends(get_db),
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartOut:
    """
    Add one unit of a menu item to the terminal's cart.

    The line is priced now, including option surcharges. Items with a
    required option group need at least one option from that group.
    """
    item = get_menu_item_by_id(db, payload.menu_item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not item.is_active:
        raise HTTPException(status_code=400, detail=f"{item.name} is not available")

    selection = _select_options(item, payload.selected_option_ids)
    if not selection.can_confirm:
        raise HTTPException(status_code=400, detail=f"Required options missing for {item.name}")

    session = registry.get(terminal_id)
    session.cart.add_item(selection.to_cart_line())
    return serialize_cart(terminal_id, session)


@pos_router.delete("/terminals/{terminal_id}/cart/items/{index}", response_model=CartOut)
def remove_cart_item(
    terminal_id: str,
    index: int,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartOut:
    """Remove the line at index. An index outside the cart changes nothing."""
    session = registry.get(terminal_id)
    session.cart.remove_item(index)
    return serialize_cart(terminal_id, session)


@pos_router.delete("/terminals/{terminal_id}/cart", response_model=CartOut)
def clear_cart(
    terminal_id: str,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartOut:
    session = registry.get(terminal_id)
    session.cart.clear_order()
    session.discount_percent = None
    return serialize_cart(terminal_id, session)


@pos_router.put("/terminals/{terminal_id}/cart/discount", response_model=CartOut)
def set_cart_discount(
    terminal_id: str,
    payload: DiscountRequest,
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartOut:
    session = registry.get(terminal_id)
    session.discount_percent = payload.discount_percent
    return serialize_cart(terminal_id, session)


# =============================================================================
# Checkout Endpoint
# =============================================================================

@pos_router.post("/terminals/{terminal_id}/checkout", response_model=CheckoutResult)
@limiter.limit(get_rate_limit_checkout)
def checkout(
    request: Request,
    terminal_id: str,
    payload: CheckoutRequest,
    registry: CartRegistry = Depends(get_cart_registry),
    gateway: BackendGateway = Depends(get_backend_gateway),
) -> CheckoutResult:
    """
    Record the terminal's cart as sales.

    A discount in the request body wins over the one stored on the cart.
    On failure the cart is kept and any sales already recorded by this
    checkout are voided; sales that could not be voided are reported in
    the 502 detail.
    """
    session = registry.get(terminal_id)
    if not session.checkout_lock.acquire(blocking=False):
        raise HTTPException(status_code=409, detail="Checkout already in progress for this terminal")

    discount = payload.discount_percent
    if discount is None:
        discount = session.discount_percent

    try:
        result = CheckoutService(gateway).complete(session.cart, payload.payment_method, discount)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckoutError as e:
        if e.unreversed_sale_ids:
            raise HTTPException(
                status_code=502,
                detail={"message": e.message, "unreversed_sale_ids": e.unreversed_sale_ids},
            )
        raise HTTPException(status_code=409, detail=e.message)
    finally:
        session.checkout_lock.release()

    session.discount_percent = None
    logger.info("Terminal %s checkout %s recorded %d sales", terminal_id, result.checkout_key, result.sales_count)
    return result
