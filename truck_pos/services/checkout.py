"""
Checkout Service for Truck POS
==============================

Turns the terminal cart into recorded sales.

Checkout Flow:
--------------
1. Validate payment method and discount.
2. Fold the cart into one sale request per distinct menu item.
3. Send each request to the backend's sale-completion command in order.
4. Sum revenue, cost and profit from the backend's answers.
5. Clear the cart only when every command succeeded.

Partial Failure:
----------------
The backend only offers a per-item sale command, so a checkout of several
menu items is several independent commits. If command N fails, commands
1..N-1 have already been recorded. Those sales are voided again, newest
first, before the error is raised, so a failed checkout leaves neither
stock nor revenue changed and the cashier can simply retry with the same
cart. A sale whose void also fails is listed on the CheckoutError so the
admin can reconcile it by hand.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from .. import config
from ..backend import BackendError, BackendGateway
from ..schemas.pos import CheckoutResult, SaleRequest, SaleResult
from .cart import Cart, build_sale_requests
from .costing import round_money

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    """Raised when checkout is attempted on an empty cart."""


class CheckoutError(Exception):
    """
    Raised when a sale-completion command reports failure.

    Attributes:
        message: Error text reported by the backend (shown to the cashier)
        menu_item_id: Menu item whose command failed
        unreversed_sale_ids: Sales from this checkout that stayed committed
            because voiding them failed ("menu_item:<id>" when the backend
            returned no sale id)
    """

    def __init__(
        self,
        message: str,
        menu_item_id: Optional[str] = None,
        unreversed_sale_ids: Optional[List[str]] = None,
    ):
        self.message = message
        self.menu_item_id = menu_item_id
        self.unreversed_sale_ids = unreversed_sale_ids or []
        super().__init__(message)


class CheckoutService:
    """Completes the sale for a terminal cart through the backend gateway."""

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    def complete(
        self,
        cart: Cart,
        payment_method: str = config.DEFAULT_PAYMENT_METHOD,
        discount_percent: Optional[float] = None,
    ) -> CheckoutResult:
        """
        Complete the sale for every line in the cart.

        Args:
            cart: The terminal cart; cleared on success, untouched on failure
            payment_method: One of config.PAYMENT_METHODS
            discount_percent: Optional percentage discount (0-100)

        Returns:
            CheckoutResult with totals summed from the backend's answers

        Raises:
            EmptyCartError: The cart has no lines
            ValueError: Unknown payment method or discount out of range
            CheckoutError: A sale command failed (earlier sales were voided)
        """
        if cart.is_empty:
            raise EmptyCartError("Cart is empty")
        if payment_method not in config.PAYMENT_METHODS:
            raise ValueError(f"Unknown payment method: {payment_method}")
        if discount_percent is not None and not 0 <= discount_percent <= 100:
            raise ValueError("Discount must be between 0 and 100 percent")

        checkout_key = str(uuid.uuid4())
        requests = build_sale_requests(cart.current_order, payment_method, discount_percent)
        logger.info(
            "Checkout %s: %d lines, %d sale commands, payment=%s",
            checkout_key, len(cart), len(requests), payment_method,
        )

        completed: List[Tuple[SaleRequest, SaleResult]] = []
        for request in requests:
            try:
                result = self.gateway.complete_sale(request)
            except BackendError as e:
                raise self._compensate(checkout_key, completed, e.detail, request.menu_item_id) from e
            if not result.success:
                error = result.error or "Sale failed"
                raise self._compensate(checkout_key, completed, error, request.menu_item_id)
            completed.append((request, result))

        results = [result for _, result in completed]
        revenue = sum(r.revenue for r in results)
        cogs = sum(r.cogs for r in results)
        profit = sum(r.profit for r in results)

        cart.clear_order()
        logger.info("Checkout %s completed: revenue=%.2f", checkout_key, revenue)

        return CheckoutResult(
            checkout_key=checkout_key,
            revenue=round_money(revenue),
            cogs=round_money(cogs),
            profit=round_money(profit),
            sale_ids=[r.sale_id for r in results if r.sale_id],
            sales_count=len(results),
        )

    def _compensate(
        self,
        checkout_key: str,
        completed: List[Tuple[SaleRequest, SaleResult]],
        error: str,
        menu_item_id: str,
    ) -> CheckoutError:
        """
        Void the sales already recorded by this checkout and build the error to raise.

        A committed sale the backend reported without an id cannot be voided;
        it is listed as "menu_item:<id>" so the error still shows it.
        """
        logger.warning(
            "Checkout %s failed on menu item %s: %s; voiding %d completed sales",
            checkout_key, menu_item_id, error, len(completed),
        )
        unreversed = []
        for request, result in reversed(completed):
            if not result.sale_id:
                logger.error(
                    "Checkout %s: sale of menu item %s has no id and cannot be voided",
                    checkout_key, request.menu_item_id,
                )
                unreversed.append(f"menu_item:{request.menu_item_id}")
                continue
            try:
                voided = self.gateway.void_sale(result.sale_id)
            except BackendError as e:
                logger.error("Checkout %s: void of sale %s raised: %s", checkout_key, result.sale_id, e)
                voided = False
            if not voided:
                unreversed.append(result.sale_id)

        if unreversed:
            logger.error(
                "Checkout %s left %d sales committed after failure: %s",
                checkout_key, len(unreversed), ", ".join(unreversed),
            )
        return CheckoutError(error, menu_item_id=menu_item_id, unreversed_sale_ids=unreversed)
