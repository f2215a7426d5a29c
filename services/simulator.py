"""
Price Simulation Service

Linear constant-elasticity what-if model: a price change of x% is assumed
to move volume by -x% * elasticity. Directional guidance, not a forecast.
"""

import math
from dataclasses import dataclass

DEFAULT_ELASTICITY = 1.5


@dataclass
class SimulationResult:
    simulated_price: float
    simulated_quantity: int
    simulated_profit: float
    profit_delta: float
    current_profit: float
    price_change_ratio: float
    quantity_change_ratio: float

    def to_dict(self):
        return {
            'simulated_price': self.simulated_price,
            'simulated_quantity': self.simulated_quantity,
            'simulated_profit': self.simulated_profit,
            'profit_delta': self.profit_delta,
            'current_profit': self.current_profit,
            'price_change_ratio': self.price_change_ratio,
            'quantity_change_ratio': self.quantity_change_ratio,
        }


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def simulate(menu_item, price_delta, elasticity=DEFAULT_ELASTICITY):
    """
    Estimate quantity and profit if `menu_item` were repriced by `price_delta`.

    menu_item needs 'selling_price', 'cost' and 'quantity_sold'. Simulated
    quantity is rounded and never negative.
    """
    selling_price = menu_item['selling_price']
    cost = menu_item['cost']
    quantity_sold = menu_item['quantity_sold']

    price_change_ratio = price_delta / selling_price if selling_price else 0.0
    quantity_change_ratio = -price_change_ratio * elasticity

    simulated_quantity = max(0, _round_half_up(quantity_sold * (1 + quantity_change_ratio)))
    simulated_price = selling_price + price_delta
    simulated_profit = simulated_quantity * (simulated_price - cost)
    current_profit = quantity_sold * (selling_price - cost)

    return SimulationResult(
        simulated_price=simulated_price,
        simulated_quantity=simulated_quantity,
        simulated_profit=simulated_profit,
        profit_delta=simulated_profit - current_profit,
        current_profit=current_profit,
        price_change_ratio=price_change_ratio,
        quantity_change_ratio=quantity_change_ratio,
    )


def simulate_range(menu_item, price_deltas, elasticity=DEFAULT_ELASTICITY):
    """Simulate several deltas at once, e.g. for a price slider."""
    return [simulate(menu_item, delta, elasticity) for delta in price_deltas]
