import pytest

from services.simulator import simulate, simulate_range

ITEM = {'selling_price': 10000, 'cost': 4000, 'quantity_sold': 100}


@pytest.mark.parametrize('elasticity', [0, 1.5, 3])
def test_zero_delta_changes_nothing(elasticity):
    result = simulate(ITEM, 0, elasticity)
    assert result.simulated_quantity == 100
    assert result.simulated_profit == result.current_profit
    assert result.profit_delta == 0


def test_price_increase_lowers_volume():
    result = simulate(ITEM, 1000, 1.5)
    assert result.price_change_ratio == pytest.approx(0.1)
    assert result.quantity_change_ratio == pytest.approx(-0.15)
    assert result.simulated_quantity == 85
    assert result.simulated_price == 11000
    assert result.simulated_profit == pytest.approx(85 * 7000)
    assert result.current_profit == 600000
    assert result.profit_delta == pytest.approx(595000 - 600000)


def test_price_cut_raises_volume():
    assert simulate(ITEM, -1000, 1.5).simulated_quantity == 115


def test_quantity_never_negative():
    result = simulate(ITEM, 10000, 1.5)
    assert result.simulated_quantity == 0
    assert result.simulated_profit == 0


def test_unpriced_item_keeps_volume():
    result = simulate({'selling_price': 0, 'cost': 0, 'quantity_sold': 12}, 500)
    assert result.price_change_ratio == 0
    assert result.simulated_quantity == 12


def test_simulate_range():
    results = simulate_range(ITEM, [-1000, 0, 1000])
    assert [r.simulated_quantity for r in results] == [115, 100, 85]
    assert results[1].to_dict()['profit_delta'] == 0
