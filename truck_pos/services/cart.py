"""
Terminal cart and checkout aggregation.

A Cart holds the lines of the order currently being rung up at one
terminal. It is a plain in-memory object: nothing here is persisted and a
fresh cart is created per terminal session (see services.terminals).

Cart lifecycle:
    Empty -> Populated on the first add_item
    Populated -> Empty on clear_order, on removing the last line, or after a
    fully successful checkout

At checkout the lines are folded into one OrderAggregate per distinct menu
item (aggregate_order) and each aggregate becomes one SaleRequest.
"""

import logging
from typing import Dict, List, Optional

from ..schemas.pos import CartLine, OrderAggregate, SaleRequest
from .costing import apply_discount

logger = logging.getLogger(__name__)


class Cart:
    """Ordered list of cart lines for one terminal."""

    def __init__(self, lines: Optional[List[CartLine]] = None):
        self._lines: List[CartLine] = list(lines or [])

    @property
    def current_order(self) -> List[CartLine]:
        """Snapshot of the current lines."""
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_item(self, line: CartLine) -> None:
        # Same item twice gives two lines; lines are only merged at checkout
        self._lines.append(line)

    def remove_item(self, index: int) -> None:
        """Remove the line at index. Out-of-range indexes are ignored."""
        if 0 <= index < len(self._lines):
            del self._lines[index]

    def clear_order(self) -> None:
        self._lines = []

    def get_total(self) -> float:
        """Sum of line prices, before any discount."""
        return sum(line.price for line in self._lines)

    def get_discounted_total(self, discount_percent: Optional[float]) -> float:
        return apply_discount(self.get_total(), discount_percent)


def aggregate_order(lines: List[CartLine]) -> List[OrderAggregate]:
    """
    Fold cart lines into one aggregate per menu item.

    Groups keep the order in which each menu item first appears. Option ids
    are concatenated in encounter order, neither sorted nor de-duplicated,
    so two units with the same option list the option twice.
    """
    buckets: Dict[str, OrderAggregate] = {}
    for line in lines:
        bucket = buckets.get(line.menu_item_id)
        if bucket is None:
            bucket = OrderAggregate(menu_item_id=line.menu_item_id, quantity=0, option_ids=[])
            buckets[line.menu_item_id] = bucket
        bucket.quantity += 1
        if line.selected_option_ids:
            bucket.option_ids.extend(line.selected_option_ids)
    return list(buckets.values())


def build_sale_requests(
    lines: List[CartLine],
    payment_method: str,
    discount_percent: Optional[float] = None,
) -> List[SaleRequest]:
    """
    Build the sale-completion requests for a checkout.

    An empty option list goes over the wire as None and a zero discount as
    None.
    """
    requests = []
    for bucket in aggregate_order(lines):
        requests.append(SaleRequest(
            menu_item_id=bucket.menu_item_id,
            quantity=bucket.quantity,
            selected_option_ids=bucket.option_ids or None,
            payment_method=payment_method,
            discount_percent=discount_percent or None,
        ))
    logger.debug("Aggregated %d cart lines into %d sale requests", len(lines), len(requests))
    return requests
