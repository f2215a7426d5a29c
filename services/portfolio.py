"""
Menu Portfolio Service

Places each menu item in a profitability quadrant relative to the averages
of the list it was classified with (usually one store over one period).

Quadrants:
- star:     sells at or above average volume and earns at or above average profit
- cashcow:  sells at or above average volume, earns below average profit
- gem:      sells below average volume, earns at or above average profit
- dog:      below average on both
- unpriced: no cost data yet; checked before everything else
"""

import logging

from constants import VALID_QUADRANTS
from .cost import DEFAULT_SAFETY_MARGIN, calculate_margin_percent

logger = logging.getLogger(__name__)


def _mean(values):
    return sum(values) / len(values) if values else 0.0


def portfolio_averages(menu_stats):
    """(avg_quantity, avg_profit) over the whole list."""
    return (
        _mean([item['quantity_sold'] for item in menu_stats]),
        _mean([item['total_profit'] for item in menu_stats]),
    )


def quadrant_for(item, avg_quantity, avg_profit):
    # Ties at the average go to the "high" side
    if not item.get('cost'):
        return 'unpriced'
    popular = item['quantity_sold'] >= avg_quantity
    profitable = item['total_profit'] >= avg_profit
    if popular and profitable:
        return 'star'
    if popular:
        return 'cashcow'
    if profitable:
        return 'gem'
    return 'dog'


def classify(menu_stats):
    """
    Annotate each {id, name, quantity_sold, total_profit, cost, margin}
    record with a 'quadrant'. Returns new dicts in input order.

    With a single item the averages are that item's own values, so it can
    only come out as 'star' or 'unpriced'; treat that as low confidence.
    """
    avg_quantity, avg_profit = portfolio_averages(menu_stats)
    classified = []
    for item in menu_stats:
        row = dict(item)
        row['quadrant'] = quadrant_for(item, avg_quantity, avg_profit)
        classified.append(row)
    logger.debug("Classified %d menu items (avg qty %.2f, avg profit %.2f)",
                 len(classified), avg_quantity, avg_profit)
    return classified


def summarize(classified, safety_margin=DEFAULT_SAFETY_MARGIN):
    """Quadrant counts, the averages used, and how many priced items sit below the safety margin."""
    avg_quantity, avg_profit = portfolio_averages(classified)
    counts = {quadrant: 0 for quadrant in VALID_QUADRANTS}
    for item in classified:
        counts[item['quadrant']] += 1
    danger_count = sum(
        1 for item in classified
        if item.get('cost') and item.get('margin', 0) < safety_margin
    )
    return {
        'avg_quantity': avg_quantity,
        'avg_profit': avg_profit,
        'counts': counts,
        'danger_count': danger_count,
        'low_confidence': len(classified) < 2,
    }


def menu_stats_from_sales(menus, quantities):
    """
    Build classifier input from menu items and units sold per menu id.

    `menus` are MenuItem rows or their dicts; menus without a sales entry
    count as zero sold.
    """
    stats = []
    for menu in menus:
        if not isinstance(menu, dict):
            menu = menu.to_dict()
        price = menu.get('selling_price') or 0.0
        cost = menu.get('current_cost') or 0.0
        sold = quantities.get(menu['id'], quantities.get(str(menu['id']), 0))
        stats.append({
            'id': menu['id'],
            'name': menu['name'],
            'price': price,
            'quantity_sold': sold,
            'total_profit': (price - cost) * sold,
            'cost': cost,
            'margin': calculate_margin_percent(price, cost),
        })
    return stats
