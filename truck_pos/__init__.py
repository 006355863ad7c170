"""Truck POS: pricing, costing, terminal cart and back-office API for a food truck."""
