"""Tests for the statistics aggregator."""

import numpy as np
import pytest

from walletsim import stats
from walletsim.population import create_population
from tests.helpers.factories import mock_population


class TestGini:
    def test_equal_balances_give_zero(self):
        assert stats.gini(np.array([7, 7, 7, 7])) == pytest.approx(0.0)

    def test_all_zero_falls_back_to_zero(self):
        assert stats.gini(np.zeros(5, dtype=np.int64)) == 0.0

    def test_empty_population_is_zero(self):
        assert stats.gini(np.empty(0, dtype=np.int64)) == 0.0

    def test_single_holder(self):
        # (n - 1) / n for one agent holding everything
        assert stats.gini(np.array([0, 0, 0, 10])) == pytest.approx(0.75)

    def test_known_value(self):
        # sorted [1, 2, 3]: 2*(1+4+9)/(3*6) - 4/3 = 2/9
        assert stats.gini(np.array([3, 1, 2])) == pytest.approx(2 / 9)

    def test_debt_is_clamped_to_zero(self):
        assert stats.gini(np.array([-10, 0, 0, 10])) == pytest.approx(
            stats.gini(np.array([0, 0, 0, 10]))
        )

    def test_all_in_debt_is_zero(self):
        assert stats.gini(np.array([-3, -1])) == 0.0


class TestCounts:
    def test_insolvent_counts_inactive_without_debt(self):
        pop = mock_population(4, balance=[0, 0, 5, 5], active=[False, False, True, True])
        assert stats.insolvent_count(pop, allow_debt=False) == 2

    def test_insolvent_counts_negative_with_debt(self):
        pop = mock_population(4, balance=[-1, 0, -3, 5])
        assert stats.insolvent_count(pop, allow_debt=True) == 2

    def test_active_count(self):
        pop = mock_population(3, active=[True, False, True])
        assert stats.active_count(pop) == 2

    def test_max_balance_floored_at_zero(self):
        pop = mock_population(2, balance=[-4, -1])
        assert stats.max_balance(pop) == 0

    def test_max_and_min_of_empty_population(self):
        pop = create_population(0, 10)
        assert stats.max_balance(pop) == 0
        assert stats.min_balance(pop) == 0

    def test_min_balance(self):
        pop = mock_population(3, balance=[4, -2, 9])
        assert stats.min_balance(pop) == -2


class TestHistogram:
    def test_empty_when_no_eligible_agents(self):
        pop = mock_population(2, balance=[0, 0], active=[False, False])
        assert stats.histogram(pop, allow_debt=False) == ()

    def test_narrow_range_uses_minimum_width(self):
        pop = mock_population(4, balance=[10, 10, 11, 12])

        buckets = stats.histogram(pop, allow_debt=False)

        assert len(buckets) == 1
        assert buckets[0].lower == 10 and buckets[0].width == 5
        assert buckets[0].count == 4
        assert buckets[0].label == "10-14"

    def test_width_snaps_to_nice_value(self):
        # range 0..200 -> ceil(200 / 15) = 14 -> 20
        pop = mock_population(3, balance=[0, 100, 200])

        buckets = stats.histogram(pop, allow_debt=False)

        assert {b.width for b in buckets} == {20}
        assert buckets[0].lower == 0
        assert buckets[-1].lower == 200
        assert len(buckets) == 11

    def test_uniform_spacing_keeps_empty_buckets(self):
        pop = mock_population(2, balance=[1, 23])

        buckets = stats.histogram(pop, allow_debt=False)

        assert [b.lower for b in buckets] == [0, 5, 10, 15, 20]
        assert [b.count for b in buckets] == [1, 0, 0, 0, 1]

    def test_counts_cover_every_eligible_agent(self):
        rng = np.random.default_rng(3)
        balances = rng.integers(0, 500, size=200)
        active = balances > 0
        pop = mock_population(200, balance=balances, active=active)

        buckets = stats.histogram(pop, allow_debt=False)

        assert sum(b.count for b in buckets) == int(active.sum())

    def test_negative_balances_start_below_zero_with_debt(self):
        pop = mock_population(3, balance=[-7, 0, 4], active=[True, False, True])

        buckets = stats.histogram(pop, allow_debt=True)

        assert buckets[0].lower == -10
        assert sum(b.count for b in buckets) == 3

    def test_inactive_agents_excluded_without_debt(self):
        pop = mock_population(3, balance=[0, 10, 12], active=[False, True, True])

        buckets = stats.histogram(pop, allow_debt=False)

        assert buckets[0].lower == 10
        assert sum(b.count for b in buckets) == 2

    def test_maximum_lands_in_last_bucket(self):
        pop = mock_population(2, balance=[0, 30])

        buckets = stats.histogram(pop, allow_debt=False)

        last = buckets[-1]
        assert last.lower <= 30 <= last.upper
        assert last.count == 1

    def test_ascending_lower_bounds(self):
        pop = mock_population(5, balance=[3, 77, 150, 42, 9])
        lowers = [b.lower for b in stats.histogram(pop, allow_debt=False)]
        assert lowers == sorted(lowers)


class TestTopAgents:
    def test_richest_first(self):
        pop = mock_population(4, balance=[5, 20, 1, 9])
        assert [a.id for a in stats.top_agents(pop, 3)] == [2, 4, 1]

    def test_ties_keep_population_order(self):
        pop = mock_population(4, balance=[5, 9, 9, 9])
        assert [a.id for a in stats.top_agents(pop, 2)] == [2, 3]

    def test_n_larger_than_population(self):
        pop = mock_population(2, balance=[1, 2])
        assert [a.id for a in stats.top_agents(pop, 10)] == [2, 1]

    def test_zero_n(self):
        assert stats.top_agents(mock_population(3), 0) == ()


def test_compute_stats_bundles_everything():
    pop = mock_population(4, balance=[0, 2, 8, 30], active=[False, True, True, True])
    pop.transaction_count[:] = [3, 1, 2, 4]

    st = stats.compute_stats(pop, allow_debt=False, top_n=2)

    assert st.gini == pytest.approx(stats.gini(pop.balance))
    assert st.insolvent == 1
    assert st.active == 3
    assert st.max_balance == 30
    assert st.min_balance == 0
    assert st.total_wealth == 40
    assert st.total_transactions == 5
    assert [a.id for a in st.leaderboard] == [4, 3]
    assert sum(b.count for b in st.histogram) == 3
