"""
Services Package for Truck POS
==============================

Business logic used by the routes, kept free of HTTP concerns.

Available Services:
-------------------
- **costing**: COGS estimates, actual COGS and option-aware pricing (pure)
- **cart**: Terminal cart and checkout aggregation (pure, in-memory)
- **options**: Option selection rules for variable-recipe items
- **checkout**: Sale completion through the backend gateway
- **terminals**: Per-terminal cart registry
- **menu**: Menu graph queries
- **inventory**: Inventory items and stock lots
- **stock**: Stock status and expiry rules
- **sales**: Sales listing and statistics
- **balance**: Owner balance inputs and history
- **formatting**: Display formatting

Services receive their dependencies (database session, backend gateway,
cart) as arguments rather than creating them.

Usage:
------
    from truck_pos.services.costing import calculate_estimated_cogs
    from truck_pos.services.cart import Cart, aggregate_order
    from truck_pos.services.checkout import CheckoutService
"""

from . import costing
from . import cart
from . import options
from . import checkout
from . import terminals

__all__ = ["costing", "cart", "options", "checkout", "terminals"]
