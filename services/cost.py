"""
Cost Calculation Service

Pure arithmetic for per-unit prices, menu costs and margins.
"""

from constants import QUANTITY_EPSILON

DEFAULT_SAFETY_MARGIN = 30.0


def calculate_price_per_unit(price, quantity=1):
    """Price of one unit when `quantity` units cost `price`."""
    if quantity is None:
        quantity = 1
    return price / max(quantity, QUANTITY_EPSILON)


def calculate_link_cost(link):
    """Cost one menu-ingredient link contributes to a single sold menu item."""
    ing = link.ingredient
    if not ing or not ing.price_per_unit:
        return 0.0
    return ing.price_per_unit * link.quantity


def calculate_menu_cost(links):
    """Sum of link costs over every ingredient the menu uses."""
    return sum((calculate_link_cost(link) for link in links), 0.0)


def calculate_margin_percent(selling_price, cost):
    """(price - cost) / price * 100, or 0 when the item has no price."""
    if not selling_price or selling_price <= 0:
        return 0.0
    return (selling_price - cost) / selling_price * 100
