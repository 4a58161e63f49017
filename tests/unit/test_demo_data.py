#!/usr/bin/env python3
"""Tests for the demo data generator."""

import pytest
from datetime import date, timedelta

from src.demo_data import HOUSEHOLD_PROFILES, DemoDataGenerator


END_DATE = date(2024, 4, 29)


class TestDemoDataGenerator:
    """Test generated household histories."""

    def test_same_seed_is_reproducible(self):
        first = DemoDataGenerator(seed=3).generate_household(days=30, end_date=END_DATE)
        second = DemoDataGenerator(seed=3).generate_household(days=30, end_date=END_DATE)
        assert first.to_dict() == second.to_dict()

    def test_one_flow_and_balance_per_day(self):
        household = DemoDataGenerator(seed=3).generate_household(days=45, end_date=END_DATE)

        assert len(household.cash_flows) == 45
        assert len(household.balance_history) == 45
        assert household.cash_flows[-1].timestamp.date() == END_DATE
        assert household.cash_flows[0].timestamp.date() == END_DATE - timedelta(days=44)

    def test_balances_follow_flows(self):
        household = DemoDataGenerator(seed=5).generate_household(
            profile="paycheck_to_paycheck", days=30, end_date=END_DATE
        )

        expected = household.starting_balance + sum(f.inflow - f.outflow for f in household.cash_flows)
        assert household.balance_daily()[-1] == pytest.approx(expected, abs=0.01 * 30)

    def test_daily_outflow_matches_transactions(self):
        household = DemoDataGenerator(seed=9).generate_household(days=20, end_date=END_DATE)

        for flow in household.cash_flows:
            spent = sum(t.amount for t in household.transactions if t.timestamp.date() == flow.timestamp.date())
            assert flow.outflow == pytest.approx(spent, abs=0.01)

    def test_categories_come_from_profile(self):
        household = DemoDataGenerator(seed=1).generate_household(
            profile="irregular_freelancer", days=60, end_date=END_DATE
        )
        allowed = set(HOUSEHOLD_PROFILES["irregular_freelancer"]["categories"])
        assert {t.category for t in household.transactions} <= allowed

    def test_unknown_profile_falls_back(self):
        household = DemoDataGenerator(seed=1).generate_household(profile="nope", days=5, end_date=END_DATE)
        assert household.name == HOUSEHOLD_PROFILES["steady_saver"]["name"]

    def test_demo_set_cycles_profiles(self):
        households = DemoDataGenerator(seed=2).generate_demo_set(count=4, days=10)
        assert [h.profile for h in households] == [
            "steady_saver", "paycheck_to_paycheck", "irregular_freelancer", "steady_saver"
        ]
