import pytest

from services.portfolio import classify, menu_stats_from_sales, summarize


def stat(id, quantity_sold, total_profit, cost=1000.0, margin=50.0):
    return {'id': id, 'name': f'menu-{id}', 'quantity_sold': quantity_sold,
            'total_profit': total_profit, 'cost': cost, 'margin': margin}


def quadrants(classified):
    return {item['id']: item['quadrant'] for item in classified}


class TestClassify:
    def test_four_quadrants(self):
        stats = [
            stat(1, 100, 500000),  # popular, profitable
            stat(2, 100, 100000),  # popular only
            stat(3, 10, 500000),   # profitable only
            stat(4, 10, 100000),   # neither
        ]
        assert quadrants(classify(stats)) == {1: 'star', 2: 'cashcow', 3: 'gem', 4: 'dog'}

    def test_missing_cost_is_unpriced(self):
        stats = [stat(1, 500, 900000, cost=0), stat(2, 10, 1000)]
        assert quadrants(classify(stats))[1] == 'unpriced'

    def test_ties_at_average_count_as_high(self):
        stats = [stat(1, 50, 1000), stat(2, 50, 1000)]
        assert quadrants(classify(stats)) == {1: 'star', 2: 'star'}

    @pytest.mark.parametrize('cost, expected', [(1000.0, 'star'), (0, 'unpriced')])
    def test_single_item(self, cost, expected):
        assert classify([stat(1, 3, 100, cost=cost)])[0]['quadrant'] == expected

    def test_invariant_to_profit_scale(self):
        stats = [stat(1, 100, 500), stat(2, 40, 900), stat(3, 70, 100), stat(4, 10, 50)]
        scaled = [dict(s, total_profit=s['total_profit'] * 3) for s in stats]
        assert quadrants(classify(stats)) == quadrants(classify(scaled))

    def test_returns_new_dicts_in_input_order(self):
        stats = [stat(2, 1, 1), stat(1, 2, 2)]
        classified = classify(stats)
        assert [item['id'] for item in classified] == [2, 1]
        assert 'quadrant' not in stats[0]

    def test_empty(self):
        assert classify([]) == []


class TestSummarize:
    def test_counts_and_danger(self):
        stats = [
            stat(1, 100, 500000, margin=60),
            stat(2, 100, 100000, margin=20),
            stat(3, 10, 500000, cost=0, margin=0),
        ]
        summary = summarize(classify(stats), safety_margin=30)

        assert summary['counts']['star'] == 1
        assert summary['counts']['cashcow'] == 1
        assert summary['counts']['unpriced'] == 1
        assert summary['counts']['dog'] == 0
        assert summary['danger_count'] == 1
        assert summary['avg_quantity'] == 70
        assert summary['low_confidence'] is False

    def test_single_item_is_low_confidence(self):
        assert summarize(classify([stat(1, 1, 1)]))['low_confidence'] is True


class TestMenuStatsFromSales:
    def test_builds_stats_from_menus(self):
        menus = [
            {'id': 1, 'name': '김치찌개', 'selling_price': 8000, 'current_cost': 3000},
            {'id': 2, 'name': '공기밥', 'selling_price': 1000, 'current_cost': 0},
        ]
        stats = menu_stats_from_sales(menus, {'1': 40})

        assert stats[0]['quantity_sold'] == 40
        assert stats[0]['total_profit'] == 200000
        assert stats[0]['margin'] == pytest.approx(62.5)
        assert stats[1]['quantity_sold'] == 0
        assert quadrants(classify(stats)) == {1: 'star', 2: 'unpriced'}
