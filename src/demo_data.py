"""
Demo Data Generator for the Finance Forecasting Engine

Generates realistic household spending, income and balance histories for
demonstrations and testing. Spending follows a weekly rhythm so the
seasonality detector has something to find.
"""

import random
from datetime import datetime, date, time, timedelta
from typing import Dict, List, Optional, Any
from dataclasses import dataclass

from src.forecasting.models import BalanceSnapshot, CashFlow, SpendingTransaction

# Household profiles with realistic daily spending patterns
HOUSEHOLD_PROFILES = {
    "steady_saver": {
        "name": "Steady Saver",
        "paycheck": (2600, 2800),
        "pay_interval_days": 14,
        "starting_balance": (6000, 9000),
        # category: (average amount, probability of a purchase on a given day)
        "categories": {
            "groceries": (45, 0.45),
            "dining": (28, 0.25),
            "transport": (12, 0.60),
            "utilities": (140, 0.03),
            "entertainment": (35, 0.10),
        },
        # Monday..Sunday
        "weekday_factors": [0.8, 0.8, 0.9, 0.9, 1.2, 1.6, 1.3],
    },
    "paycheck_to_paycheck": {
        "name": "Paycheck to Paycheck",
        "paycheck": (1500, 1650),
        "pay_interval_days": 14,
        "starting_balance": (300, 900),
        "categories": {
            "groceries": (60, 0.50),
            "dining": (22, 0.45),
            "transport": (18, 0.70),
            "utilities": (180, 0.04),
            "shopping": (55, 0.20),
        },
        "weekday_factors": [0.7, 0.8, 0.8, 0.9, 1.3, 1.8, 1.4],
    },
    "irregular_freelancer": {
        "name": "Irregular Freelancer",
        "paycheck": (800, 4200),
        "pay_interval_days": 10,
        "starting_balance": (2000, 5000),
        "categories": {
            "groceries": (50, 0.40),
            "dining": (30, 0.35),
            "software": (65, 0.05),
            "travel": (320, 0.02),
            "coffee": (6, 0.80),
        },
        "weekday_factors": [1.1, 1.1, 1.0, 1.0, 1.0, 0.9, 0.8],
    },
}


@dataclass
class GeneratedHousehold:
    """Generated household data structure"""
    profile: str
    name: str
    starting_balance: float
    transactions: List[SpendingTransaction]
    cash_flows: List[CashFlow]
    balance_history: List[BalanceSnapshot]

    def spend_daily(self) -> List[float]:
        return [flow.outflow for flow in self.cash_flows]

    def income_daily(self) -> List[float]:
        return [flow.inflow for flow in self.cash_flows]

    def balance_daily(self) -> List[float]:
        return [snapshot.balance for snapshot in self.balance_history]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "name": self.name,
            "startingBalance": self.starting_balance,
            "transactions": [t.to_dict() for t in self.transactions],
            "flows": [f.to_dict() for f in self.cash_flows],
            "history": [b.to_dict() for b in self.balance_history]
        }


class DemoDataGenerator:
    """
    Generate realistic demo data for the forecasting engine.

    Creates household histories with:
    - Category-level card transactions on a weekly rhythm
    - Regular paychecks
    - Daily cash flows and end-of-day balances

    Example:
        generator = DemoDataGenerator(seed=42)

        household = generator.generate_household(
            profile="paycheck_to_paycheck",
            days=90
        )

        households = generator.generate_demo_set()
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize generator with optional random seed for reproducibility"""
        self.rng = random.Random(seed)

    def generate_household(
        self,
        profile: str = "steady_saver",
        days: int = 90,
        end_date: Optional[date] = None
    ) -> GeneratedHousehold:
        """
        Generate a household with ``days`` of history ending at ``end_date``.

        Args:
            profile: Household type (see HOUSEHOLD_PROFILES)
            days: Number of days of history
            end_date: Last day of history (defaults to today)

        Returns:
            GeneratedHousehold with all data populated
        """
        settings = HOUSEHOLD_PROFILES.get(profile, HOUSEHOLD_PROFILES["steady_saver"])
        end_date = end_date or date.today()
        start_date = end_date - timedelta(days=days - 1)

        starting_balance = round(self.rng.uniform(*settings["starting_balance"]), 2)
        balance = starting_balance

        transactions = []
        cash_flows = []
        balance_history = []

        for offset in range(days):
            day = datetime.combine(start_date + timedelta(days=offset), time.min)
            weekday_factor = settings["weekday_factors"][day.weekday()]

            day_transactions = self._generate_day_transactions(day, settings["categories"], weekday_factor)
            transactions.extend(day_transactions)

            inflow = 0.0
            if offset % settings["pay_interval_days"] == 0:
                inflow = round(self.rng.uniform(*settings["paycheck"]), 2)

            outflow = round(sum(t.amount for t in day_transactions), 2)
            cash_flows.append(CashFlow(timestamp=day, inflow=inflow, outflow=outflow))

            balance = round(balance + inflow - outflow, 2)
            balance_history.append(BalanceSnapshot(timestamp=day + timedelta(hours=23), balance=balance))

        return GeneratedHousehold(
            profile=profile,
            name=settings["name"],
            starting_balance=starting_balance,
            transactions=transactions,
            cash_flows=cash_flows,
            balance_history=balance_history
        )

    def _generate_day_transactions(
        self,
        day: datetime,
        categories: Dict[str, tuple],
        weekday_factor: float
    ) -> List[SpendingTransaction]:
        """Generate the card transactions of a single day"""
        transactions = []

        for category, (average, probability) in categories.items():
            if self.rng.random() >= min(1.0, probability * weekday_factor):
                continue

            amount = average * weekday_factor * self.rng.uniform(0.6, 1.4)
            hour = self.rng.randint(8, 21)
            transactions.append(SpendingTransaction(
                timestamp=day + timedelta(hours=hour, minutes=self.rng.randint(0, 59)),
                amount=round(amount, 2),
                category=category
            ))

        return transactions

    def generate_demo_set(self, count: int = 3, days: int = 90) -> List[GeneratedHousehold]:
        """Generate one household per profile, cycling through profiles"""
        profiles = list(HOUSEHOLD_PROFILES)
        return [
            self.generate_household(profile=profiles[i % len(profiles)], days=days)
            for i in range(count)
        ]
